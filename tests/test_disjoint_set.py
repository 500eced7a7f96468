from disjoint_set import DisjointSet


def test_singletons():
    ds = DisjointSet(4)
    assert len(ds) == 4
    assert [ds.find(i) for i in range(4)] == [0, 1, 2, 3]


def test_union_chain_and_cycle_detection():
    ds = DisjointSet(4)
    assert ds.union(0, 1) is True
    assert ds.union(1, 2) is True

    assert ds.find(0) == ds.find(2)
    assert ds.union(0, 2) is False
    assert not ds.connected(0, 3)


def test_union_same_element_is_a_cycle():
    ds = DisjointSet(2)
    assert ds.union(1, 1) is False


def test_find_compresses_path():
    ds = DisjointSet(5)
    # Build the chain 0 -> 1 -> 2 -> 3 -> 4
    for i in range(4):
        ds.union(i, i + 1)
    assert ds.parent == [1, 2, 3, 4, 4]

    root = ds.find(0)

    assert root == 4
    assert ds.parent == [4, 4, 4, 4, 4]


def test_all_merged():
    ds = DisjointSet(6)
    for a, b in [(0, 1), (2, 3), (4, 5), (1, 3), (3, 5)]:
        assert ds.union(a, b)
    assert len({ds.find(i) for i in range(6)}) == 1
