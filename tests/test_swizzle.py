import pytest

from voxelcore.swizzle import (
    Dim3,
    Swizzle3,
    compose,
    get_component,
    split,
    with_component,
)

VEC = (1.5, -2.0, 7.25)
IVEC = (3, 4, 5)


@pytest.mark.parametrize("dim", list(Dim3))
@pytest.mark.parametrize("vec", [VEC, IVEC])
def test_split_compose_round_trip(vec, dim):
    it, others = split(vec, dim)
    assert compose(dim, it, others) == vec


def test_split_keeps_remaining_order():
    a, b, c = IVEC
    assert split(IVEC, Dim3.X) == (a, (b, c))
    assert split(IVEC, Dim3.Y) == (b, (a, c))
    assert split(IVEC, Dim3.Z) == (c, (a, b))


def test_compose_places_component():
    assert compose(Dim3.X, "it", ("u", "v")) == ("it", "u", "v")
    assert compose(Dim3.Y, "it", ("u", "v")) == ("u", "it", "v")
    assert compose(Dim3.Z, "it", ("u", "v")) == ("u", "v", "it")


@pytest.mark.parametrize("dim", list(Dim3))
def test_get_component_matches_split(dim):
    assert get_component(VEC, dim) == split(VEC, dim)[0]


@pytest.mark.parametrize("dim", list(Dim3))
def test_with_component_replaces_only_one(dim):
    updated = with_component(VEC, dim, 42.0)
    assert get_component(updated, dim) == 42.0
    assert split(updated, dim)[1] == split(VEC, dim)[1]
    assert VEC == (1.5, -2.0, 7.25)


def test_swizzle_identity():
    assert Swizzle3.XYZ.apply(VEC) == VEC


def test_swizzle_examples():
    a, b, c = IVEC
    assert Swizzle3.XZY.apply(IVEC) == (a, c, b)
    assert Swizzle3.YZX.apply(IVEC) == (b, c, a)
    assert Swizzle3.ZYX.apply(IVEC) == (c, b, a)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("XYZ", (3, 4, 5)),
        ("XZY", (3, 5, 4)),
        ("YXZ", (4, 3, 5)),
        ("YZX", (4, 5, 3)),
        ("ZXY", (5, 3, 4)),
        ("ZYX", (5, 4, 3)),
    ],
)
def test_swizzle_is_permutation(name, expected):
    result = Swizzle3[name].apply(IVEC)
    assert result == expected
    assert sorted(result) == sorted(IVEC)


def test_swizzle_cycles():
    assert Swizzle3.YZX.apply(Swizzle3.YZX.apply(Swizzle3.YZX.apply(IVEC))) == IVEC
    assert Swizzle3.ZXY.apply(Swizzle3.YZX.apply(IVEC)) == IVEC
    assert Swizzle3.ZYX.apply(Swizzle3.ZYX.apply(IVEC)) == IVEC


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        split((1, 2), Dim3.X)
    with pytest.raises(ValueError):
        compose(Dim3.X, 1, (2, 3, 4))
    with pytest.raises(ValueError):
        Swizzle3.XYZ.apply((1, 2, 3, 4))