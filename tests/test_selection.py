from distomeasure.selection import HEIGHT_SLOTS, WIDTH_SLOTS, select_minimum


def test_slot_names() -> None:
    assert WIDTH_SLOTS == ("top", "mid", "bottom")
    assert HEIGHT_SLOTS == ("left", "center", "right")


def test_select_minimum_skips_missing_values() -> None:
    samples = [("top", 52.125), ("mid", None), ("bottom", 51.0)]
    assert select_minimum(samples) == ("bottom", 51.0)


def test_select_minimum_without_values() -> None:
    assert select_minimum([("top", None), ("mid", None), ("bottom", None)]) is None
    assert select_minimum([]) is None


def test_select_minimum_ties_keep_first_slot() -> None:
    assert select_minimum([("top", 10.0), ("mid", 10.0), ("bottom", 12.0)]) == ("top", 10.0)
    assert select_minimum([("left", 12.0), ("center", 9.5), ("right", 9.5)]) == ("center", 9.5)


def test_select_minimum_zero_is_a_value() -> None:
    assert select_minimum([("top", None), ("mid", 0.0), ("bottom", 3.0)]) == ("mid", 0.0)


def test_select_minimum_accepts_generators() -> None:
    values = {"top": 3.0, "mid": -1.0, "bottom": 2.0}
    assert select_minimum((name, values[name]) for name in WIDTH_SLOTS) == ("mid", -1.0)
