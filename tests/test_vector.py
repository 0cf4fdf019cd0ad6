import numpy as np
import pytest

from particle_dynamics.errors import DegenerateVectorError, InvalidArgumentError, MissingReferenceError
from particle_dynamics.vector import Vector3


def test_in_place_operations_chain_and_mutate_receiver():
    """add/scale return the receiver so calls chain."""
    v = Vector3(1, 2, 3)
    out = v.add_components(3, 2, 1).scale(2)
    assert out is v
    assert v == Vector3(8, 8, 8)


def test_allocating_operations_leave_operands_untouched():
    a = Vector3(1, 2, 3)
    b = Vector3(1, 1, 1)
    d = Vector3.difference(a, b)
    assert d == Vector3(0, 1, 2)
    assert a == Vector3(1, 2, 3)
    assert b == Vector3(1, 1, 1)

    s = a + b
    assert s == Vector3(2, 3, 4)
    assert s is not a


def test_explicit_target_may_alias_an_operand():
    """Vector3.sum(a, b, a) behaves like a.add(b)."""
    a = Vector3(1, 0, 0)
    b = Vector3(0, 2, 0)
    out = Vector3.sum(a, b, a)
    assert out is a
    assert a == Vector3(1, 2, 0)

    out = Vector3.difference(a, b, b)
    assert out is b
    assert b == Vector3(1, 0, 0)

    out = Vector3.scaled(a, 3.0, a)
    assert a == Vector3(3, 6, 0)


def test_augmented_operators_mutate():
    v = Vector3(1, 1, 1)
    alias = v
    v += Vector3(1, 0, 0)
    v -= Vector3(0, 1, 0)
    v *= 2
    assert alias is v
    assert v == Vector3(4, 0, 2)


def test_equality_is_exact_and_vectors_unhashable():
    assert Vector3(0.1 + 0.2, 0, 0) != Vector3(0.3, 0, 0)
    assert Vector3(1, 2, 3) == Vector3(1, 2, 3)
    with pytest.raises(TypeError):
        hash(Vector3())


def test_set_length_and_negative_length_reverses():
    v = Vector3(3, 0, 4).set_length(10)
    assert np.allclose(v.to_array(), [6, 0, 8])

    v = Vector3(2, 0, 0).set_length(-1)
    assert v == Vector3(-1, 0, 0)


def test_zero_vector_degenerate_operations_raise():
    with pytest.raises(DegenerateVectorError):
        Vector3().normalize()
    with pytest.raises(DegenerateVectorError):
        Vector3().set_length(1.0)
    with pytest.raises(DegenerateVectorError):
        Vector3(1, 0, 0).project_onto(Vector3())
    with pytest.raises(DegenerateVectorError):
        Vector3().floor(1.0)
    # DegenerateVectorError is a ZeroDivisionError
    with pytest.raises(ZeroDivisionError):
        Vector3().normalize()


def test_limit_and_floor():
    assert Vector3(10, 0, 0).limit(2) == Vector3(2, 0, 0)
    assert Vector3(1, 0, 0).limit(2) == Vector3(1, 0, 0)
    assert Vector3(1, 2, 3).limit(0).is_zero()
    assert Vector3(1, 2, 3).limit(-1).is_zero()

    assert Vector3(0.5, 0, 0).floor(2) == Vector3(2, 0, 0)
    assert Vector3(5, 0, 0).floor(2) == Vector3(5, 0, 0)
    # non-positive floor is a no-op, even on the zero vector
    assert Vector3().floor(0).is_zero()


def test_project_onto():
    v = Vector3(1, 1, 0).project_onto(Vector3(2, 0, 0))
    assert v == Vector3(1, 0, 0)


def test_cross_follows_right_hand_rule():
    x = Vector3(1, 0, 0)
    y = Vector3(0, 1, 0)
    assert x.cross(y) == Vector3(0, 0, 1)
    assert y.cross(x) == Vector3(0, 0, -1)
    assert x == Vector3(1, 0, 0)


def test_queries():
    a = Vector3(1, 2, 2)
    assert a.length() == pytest.approx(3.0)
    assert a.length_squared() == pytest.approx(9.0)
    assert a.dot(Vector3(1, 0, 0)) == pytest.approx(1.0)
    assert a.distance_to(Vector3(1, 2, 0)) == pytest.approx(2.0)
    assert a.distance_squared_to(Vector3(1, 2, 0)) == pytest.approx(4.0)
    assert a.distance_to_point(1, 2, 0) == pytest.approx(2.0)
    assert list(a) == [1.0, 2.0, 2.0]
    assert Vector3().is_zero()


def test_missing_operands_raise():
    v = Vector3()
    with pytest.raises(MissingReferenceError):
        v.add(None)
    with pytest.raises(MissingReferenceError):
        Vector3.sum(v, None)
    with pytest.raises(MissingReferenceError):
        Vector3.coerce(None)
    # MissingReferenceError is also a TypeError
    with pytest.raises(TypeError):
        v.set(None)


def test_coerce_copies_and_validates_shape():
    src = Vector3(1, 2, 3)
    v = Vector3.coerce(src)
    assert v == src and v is not src
    assert Vector3.coerce((4, 5, 6)) == Vector3(4, 5, 6)
    with pytest.raises(InvalidArgumentError):
        Vector3.coerce((1, 2))
