import pytest

from hprof.node import TimerNode


@pytest.fixture
def tree():
    root = TimerNode("root")
    physics = root.child("physics")
    physics.add_sample(60)
    physics.child("collision").add_sample(30)
    root.child("render").add_sample(40)
    return root


def test_child_lookup_or_create(tree):
    physics = tree.children["physics"]
    assert tree.child("physics") is physics
    assert list(tree.children) == ["physics", "render"]

    new = tree.child("audio")
    assert new.name == "audio"
    assert new.self_duration == 0
    assert list(tree.children) == ["physics", "render", "audio"]


def test_names_are_case_sensitive():
    root = TimerNode("root")
    assert root.child("Physics") is not root.child("physics")
    assert len(root.children) == 2


def test_add_sample_accumulates():
    node = TimerNode("x")
    node.add_sample(10)
    node.add_sample(15)
    assert node.self_duration == 25


def test_exclusive_duration(tree):
    assert tree.children["physics"].exclusive_duration == 30
    assert tree.children["render"].exclusive_duration == 40


def test_exclusive_duration_never_negative():
    node = TimerNode("x")
    node.add_sample(5)
    node.child("y").add_sample(8)
    assert node.exclusive_duration == 0


def test_tree_duration_sums_every_descendant(tree):
    assert tree.tree_duration() == 60 + 30 + 40


def test_walk_is_preorder_in_insertion_order(tree):
    visited = [(depth, parent.name if parent else None, node.name) for depth, parent, node in tree.walk()]
    assert visited == [
        (0, None, "root"),
        (1, "root", "physics"),
        (2, "physics", "collision"),
        (1, "root", "render"),
    ]


def test_find(tree):
    assert tree.find("physics", "collision").self_duration == 30
    assert tree.find() is tree
    assert tree.find("render", "collision") is None
