import dataclasses
from collections import namedtuple
from dataclasses import dataclass, field

import pytest

from reactlens.lenses import Lens, attr, getset, item, over, put, view


@dataclass(frozen=True)
class Yearday:
    day: int
    month: int


@dataclass(frozen=True)
class Person:
    birthday: Yearday
    name: str
    things: tuple = field(default_factory=tuple)


def attr2(name):
    return getset(
        lambda x: getattr(x, name),
        lambda x, v: dataclasses.replace(x, **{name: v}),
    )


def test_minimal_example():
    month = Lens(lambda p: p.month, lambda p, x: dataclasses.replace(p, month=x))
    birthday = Lens(
        lambda p: p.birthday, lambda p, x: dataclasses.replace(p, birthday=x)
    )
    name = Lens(lambda p: p.name, lambda p, x: dataclasses.replace(p, name=x))
    birthday_month = birthday | month

    p1 = Person(Yearday(5, 4), "juanpe")
    assert view(name, p1) == "juanpe"
    assert view(birthday_month, p1) == 4

    p2 = put(birthday_month, p1, 6)
    assert p2.birthday.month == 6
    assert view(birthday_month, p2) == 6

    p3 = over(birthday_month, p1, lambda x: x - 1)
    assert view(birthday_month, p3) == 3
    assert p3.birthday.month == 3


@pytest.mark.parametrize("make", [attr, attr2])
def test_attr(make):
    name = make("name")
    birthday_month = make("birthday") | make("month")

    p1 = Person(Yearday(5, 4), "juanpe")
    assert view(name, p1) == "juanpe"
    assert view(birthday_month, p1) == 4

    p2 = put(birthday_month, p1, 6)
    assert p2.birthday.month == 6
    assert view(birthday_month, p2) == 6

    p3 = over(birthday_month, p1, lambda x: x - 1)
    assert view(birthday_month, p3) == 3
    assert p3.birthday.month == 3


@pytest.mark.parametrize("make", [attr, attr2])
def test_attr_references(make):
    name = make("name")
    birthday = make("birthday")
    p1 = Person(Yearday(5, 4), "juanpe", ("foo", "bar"))
    assert view(name, p1) is p1.name
    assert view(birthday, p1) is p1.birthday
    assert view(make("things"), p1) is p1.things


def test_put_leaves_original_untouched():
    birthday_month = attr("birthday") | attr("month")
    p1 = Person(Yearday(5, 4), "juanpe")
    p2 = put(birthday_month, p1, 6)
    assert p1.birthday.month == 4
    assert p2.name == p1.name
    assert p2.birthday.day == p1.birthday.day


def test_attr_on_plain_object_copies():
    class Box:
        def __init__(self, value):
            self.value = value

    b = Box(1)
    b2 = put(attr("value"), b, 2)
    assert b.value == 1
    assert b2.value == 2
    assert b2 is not b


def test_attr_on_namedtuple():
    Point = namedtuple("Point", "x y")
    p = Point(1, 2)
    assert put(attr("y"), p, 7) == Point(1, 7)
    assert p == Point(1, 2)


def increment(x):
    return x + 1


def test_element_tuple():
    foo = (1, 2, 3)
    assert view(item(0), foo) == 1
    assert view(item(1), foo) == 2
    assert view(item(2), foo) == 3
    assert over(item(1), foo, increment) == (1, 3, 3)


def test_element_pair():
    foo = (1, 2)
    assert view(item(0), foo) == 1
    assert view(item(1), foo) == 2
    assert over(item(1), foo, increment) == (1, 3)


def test_element_array():
    foo = [1, 2, 3]
    assert view(item(0), foo) == 1
    assert view(item(1), foo) == 2
    assert view(item(2), foo) == 3
    assert over(item(1), foo, increment) == [1, 3, 3]
    assert foo == [1, 2, 3]


def test_item_on_dict():
    d = {"a": 1, "b": 2}
    assert view(item("a"), d) == 1
    assert put(item("b"), d, 5) == {"a": 1, "b": 5}
    assert d == {"a": 1, "b": 2}


def test_item_missing_raises():
    with pytest.raises(IndexError):
        view(item(0), [])
    with pytest.raises(IndexError):
        put(item(3), (1, 2), 9)
    with pytest.raises(KeyError):
        view(item("x"), {})


def test_item_on_string_cannot_be_set():
    with pytest.raises(TypeError):
        put(item(0), "abc", "z")


def test_item_composed_with_attr():
    people = [Person(Yearday(5, 4), "juanpe")]
    first_name = item(0) | attr("name")
    assert view(first_name, people) == "juanpe"
    assert view(first_name, put(first_name, people, "bar")) == "bar"
    assert view(first_name, put(item(0), people, Person(Yearday(1, 1), "foo"))) == "foo"


def test_composition_is_associative():
    data = {"p": Person(Yearday(5, 4), "juanpe")}
    left = (item("p") | attr("birthday")) | attr("day")
    right = item("p") | (attr("birthday") | attr("day"))
    assert view(left, data) == view(right, data) == 5
    assert put(left, data, 9) == put(right, data, 9)


def test_or_with_non_lens_is_unsupported():
    with pytest.raises(TypeError):
        attr("name") | 3