"""
City catalog and great-circle distances, used to build complete city graphs
"""

import math
from collections import namedtuple

City = namedtuple("City", ["name", "latitude", "longitude"])

EARTH_RADIUS_KM = 6371

# Major cities of China (latitude, longitude in degrees)
CITIES = (
    City("Beijing", 39.9042, 116.4074),
    City("Shanghai", 31.2304, 121.4737),
    City("Guangzhou", 23.1291, 113.2644),
    City("Shenzhen", 22.5431, 114.0579),
    City("Chengdu", 30.5728, 104.0668),
    City("Hangzhou", 30.2741, 120.1551),
    City("Wuhan", 30.5928, 114.3055),
    City("Xi'an", 34.3416, 108.9398),
    City("Chongqing", 29.5630, 106.5516),
    City("Nanjing", 32.0603, 118.7969),
    City("Tianjin", 39.3434, 117.3611),
    City("Suzhou", 31.2989, 120.5853),
    City("Qingdao", 36.0631, 120.3829),
    City("Xiamen", 24.4797, 118.0894),
    City("Changsha", 28.1983, 112.9801),
    City("Zhengzhou", 34.7474, 113.6249),
    City("Hefei", 31.8206, 117.2272),
    City("Fuzhou", 26.0753, 119.3062),
    City("Kunming", 25.0385, 102.7188),
    City("Shenyang", 41.7969, 123.4304),
    City("Harbin", 45.7579, 126.6467),
    City("Lanzhou", 36.0611, 103.8343),
    City("Yinchuan", 38.4667, 106.2762),
    City("Urumqi", 43.7928, 87.6177),
    City("Nanning", 22.8240, 108.3661),
    City("Haikou", 20.0173, 110.3492),
    City("Lhasa", 29.6456, 91.1468),
    City("Hong Kong", 22.3964, 114.1095),
    City("Macau", 22.1987, 113.5439),
    City("Taipei", 25.0330, 121.5654),
)

_CITIES_BY_NAME = {city.name: city for city in CITIES}


def city_names():
    return [city.name for city in CITIES]


def find_city(name):
    """Return the City called ``name``, or None"""
    return _CITIES_BY_NAME.get(name)


def haversine_distance(city1, city2):
    """Great-circle distance in km, rounded to one decimal"""
    lat1 = math.radians(city1.latitude)
    lon1 = math.radians(city1.longitude)
    lat2 = math.radians(city2.latitude)
    lon2 = math.radians(city2.longitude)

    d_lat = lat2 - lat1
    d_lon = lon2 - lon1

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return round(EARTH_RADIUS_KM * c, 1)


def build_distance_matrix(names):
    """
    Complete graph over the named cities.

    Returns (labels, matrix) with zero diagonal. Unknown names raise KeyError.
    """
    cities = []
    for name in names:
        city = find_city(name)
        if city is None:
            raise KeyError(f"Unknown city: {name}")
        cities.append(city)

    n = len(cities)
    matrix = [[0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            distance = haversine_distance(cities[i], cities[j])
            matrix[i][j] = distance
            matrix[j][i] = distance

    return [city.name for city in cities], matrix
