"""Tests for mapping persisted service records into the report model."""

from __future__ import annotations

from pmreport.report.report_data import DetectedIssue, StatusItem
from pmreport.report.service_record import (
    detect_issues,
    format_date,
    format_datetime,
    map_service_record,
)


def test_status_pairs_note_and_raw_flag(service_record: dict) -> None:
    data = map_service_record(service_record)
    assert data.opticals.reflector == StatusItem(status="Clean", yes_no="OK")
    # The flag is copied verbatim, parenthetical and all.
    assert data.opticals.uv_filter == StatusItem(
        status="Cracked filter", yes_no="Replaced (old one cracked)"
    )
    assert data.electronics.imcb_board.yes_no == "Yes"
    assert data.opticals.fold_mirror == StatusItem()


def test_identification_falls_back_to_site(service_record: dict) -> None:
    data = map_service_record(service_record)
    assert data.cinema_name == "INOX Nehru Place"
    assert data.address == "Nehru Place, New Delhi"
    assert data.screen_no == "2"
    assert data.projector_model == "CP4230"
    assert data.running_hours == "23110"


def test_record_values_win_over_site(service_record: dict) -> None:
    service_record["cinemaName"] = "Record Cinema"
    assert map_service_record(service_record).cinema_name == "Record Cinema"


def test_service_visit_combines_engineer_and_ordinal(service_record: dict) -> None:
    assert map_service_record(service_record).service_visit == "Arjun - Third"
    service_record["engineerName"] = ""
    assert map_service_record(service_record).service_visit == "3"


def test_dates_are_formatted(service_record: dict) -> None:
    data = map_service_record(service_record)
    assert data.date == "12/03/2025"
    assert data.start_time == "12/03/2025 09:30"
    assert data.end_time == "12/03/2025 12:05"


def test_format_helpers_pass_through_unparseable_text() -> None:
    assert format_date("next week") == "next week"
    assert format_datetime(None) == ""
    assert format_date("2025-01-05") == "05/01/2025"


def test_measurements_use_record_field_names(service_record: dict) -> None:
    data = map_service_record(service_record)
    assert data.fl_before == "10.5"
    assert data.fl_after == "13.9"
    assert data.air_pollution.pm25 == "35"
    assert data.air_pollution.pm100 == "12"
    assert data.air_pollution.pm10 == "48"
    assert (data.cie_xyz_2k.x, data.cie_xyz_2k.y, data.cie_xyz_2k.fl) == ("0.313", "0.329", "14.1")
    assert data.mcgd_data.white_2k.fl == "14.0"
    assert data.image_evaluation.focus_boresite == "Yes"


def test_exhaust_cfm_and_le_status(service_record: dict) -> None:
    data = map_service_record(service_record)
    assert data.mechanical.exhaust_cfm == StatusItem(status="760", yes_no="OK")
    assert data.le_status == "Removed - sent to lab"

    work = service_record["workDetails"]
    work.pop("exhaustCfm")
    work.pop("leStatusNote")
    data = map_service_record(service_record)
    assert data.mechanical.exhaust_cfm == StatusItem()
    assert data.le_status == "Removed"


def test_recommended_parts_accept_name_and_snake_case(service_record: dict) -> None:
    (part,) = map_service_record(service_record).recommended_parts
    assert part.part_number == "003-005210-01"
    assert part.description == "Lamp house fan assembly for CP4230 series"


def test_images_link(service_record: dict) -> None:
    data = map_service_record(service_record, images_base_url="https://pm.example.com")
    assert data.images_link == "https://pm.example.com/admin/services/svc-42/images"

    service_record["workDetails"]["photosDriveLink"] = "https://drive.example.com/f/1"
    assert map_service_record(service_record).images_link == "https://drive.example.com/f/1"

    service_record["workDetails"].pop("photosDriveLink")
    service_record["images"] = []
    assert map_service_record(service_record).images_link == ""


def test_signature_key_variants(service_record: dict) -> None:
    service_record["signatures"] = {
        "engineerSignatureUrl": "https://cdn.example.com/eng.png",
        "site": "data:image/png;base64,AAAA",
    }
    data = map_service_record(service_record)
    assert data.engineer_signature_url == "https://cdn.example.com/eng.png"
    assert data.site_signature_url == "data:image/png;base64,AAAA"


def test_detect_issues_skips_ok_values_and_adds_notes(service_record: dict) -> None:
    issues = detect_issues(service_record["workDetails"])
    assert issues == [
        DetectedIssue("UV Filter", "Replaced (old one cracked)"),
        DetectedIssue("UV Filter Note", "Order replacement"),
        DetectedIssue("LE Status", "Removed"),
        DetectedIssue("LiteLOC Status", "Faulty"),
    ]


def test_detect_issues_case_insensitive_ok_values() -> None:
    work = {"reflector": "  Working ", "coldMirror": "NOT AVAILABLE", "touchPanel": "none"}
    assert detect_issues(work) == []


def test_missing_sections_do_not_fail() -> None:
    data = map_service_record({})
    assert data.cinema_name == ""
    assert data.recommended_parts == []
    assert data.detected_issues == []
