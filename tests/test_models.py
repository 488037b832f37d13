import datetime

import pytest
from pydantic import ValidationError

from distomeasure.models import (
    JobRecord,
    WindowRecord,
    add_window,
    find_window,
    new_job,
    remove_window,
    set_window_field,
)
from distomeasure.parsers.units import Unit


def test_new_job_has_one_labelled_window() -> None:
    record = new_job(job_number=" J-100 ", units="mm")
    assert record.job.job_number == "J-100"
    assert record.job.units is Unit.MILLIMETERS
    assert record.job.date == datetime.date.today().isoformat()
    assert len(record.windows) == 1
    window = record.windows[0]
    assert window.label == "1"
    assert len(window.id) == 8
    assert window.splits == ["", "", ""]
    assert (window.width.top, window.width.mid, window.width.bottom) == ("", "", "")


def test_payload_uses_wire_names() -> None:
    record = new_job(job_number="J-1")
    payload = record.to_payload()
    window = payload["windows"][0]
    assert payload["job"]["units"] == "in"
    assert window["type"] == ""
    assert window["splitCount"] == 0
    assert window["width"] == {"top": "", "mid": "", "bottom": ""}
    assert window["height"] == {"left": "", "center": "", "right": ""}


def test_record_round_trips_unknown_fields() -> None:
    payload = {
        "job": {"job_number": "J-2", "units": "mm", "crew": "B"},
        "windows": [
            {
                "id": "abc12345",
                "label": "Kitchen",
                "type": "cell",
                "splitCount": 1,
                "splits": ["20"],
                "mount": "inside",
            }
        ],
    }
    record = JobRecord.model_validate(payload)
    window = record.windows[0]
    assert window.window_type == "cell"
    assert window.split_count == 1
    assert window.splits == ["20", "", ""]
    dumped = record.to_payload()
    assert dumped["windows"][0]["mount"] == "inside"
    assert dumped["job"]["crew"] == "B"


@pytest.mark.parametrize(
    "window",
    [
        {"splitCount": 4},
        {"splitCount": -1},
        {"type": "awning"},
        {"splits": ["1", "2", "3", "4"]},
    ],
)
def test_window_validation(window) -> None:
    with pytest.raises(ValidationError):
        WindowRecord.model_validate(window)


def test_remove_window_renumbers_numeric_labels() -> None:
    record = new_job()
    second = add_window(record)
    third = add_window(record)
    third.label = "Kitchen"
    fourth = add_window(record)
    assert [w.label for w in record.windows] == ["1", "2", "Kitchen", "4"]

    assert remove_window(record, second.id) is True
    assert [w.label for w in record.windows] == ["1", "Kitchen", "3"]
    assert find_window(record, fourth.id).label == "3"
    assert remove_window(record, "missing") is False


def test_set_window_field_paths() -> None:
    window = WindowRecord()
    set_window_field(window, "width.top", "52.125")
    set_window_field(window, "height.right", "40")
    set_window_field(window, "splits.1", "18")
    set_window_field(window, "splitCount", "2")
    set_window_field(window, "type", "roller")
    set_window_field(window, "notes", "left side")
    assert window.width.top == "52.125"
    assert window.height.right == "40"
    assert window.splits == ["", "18", ""]
    assert window.split_count == 2
    assert window.window_type == "roller"
    assert window.notes == "left side"


def test_set_window_field_blank_split_count() -> None:
    window = WindowRecord(splitCount=2)
    set_window_field(window, "splitCount", "")
    assert window.split_count == 0


@pytest.mark.parametrize("path", ["width.diagonal", "frame", "splits.3", "splits.x", "room.name"])
def test_set_window_field_unknown_path(path: str) -> None:
    with pytest.raises(KeyError):
        set_window_field(WindowRecord(), path, "1")


def test_set_window_field_rejects_invalid_value() -> None:
    with pytest.raises(ValidationError):
        set_window_field(WindowRecord(), "splitCount", "7")
