"""Map a persisted service record to the report model.

A service record stores each inspected component as a flag column plus a
sibling ``<field>Note`` column.  The mapping here pairs them into
:class:`StatusItem` values (note -> ``status``, flag -> ``yes_no``) and copies
measurements verbatim; it performs no validation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .report_data import (
    AirPollution,
    ColorReading,
    DetectedIssue,
    Electronics,
    ImageEvaluation,
    LightEngineTest,
    MaintenanceReportData,
    McgdData,
    Mechanical,
    Opticals,
    RecommendedPart,
    ScreenDimensions,
    ScreenInfo,
    StatusItem,
    VoltageParams,
    convert_service_visit_to_text,
)

# Status columns checked for issues, with their display label.
ISSUE_STATUS_FIELDS: tuple[tuple[str, str], ...] = (
    ("reflector", "Reflector"),
    ("uvFilter", "UV Filter"),
    ("integratorRod", "Integrator Rod"),
    ("coldMirror", "Cold Mirror"),
    ("foldMirror", "Fold Mirror"),
    ("touchPanel", "Touch Panel"),
    ("evbBoard", "EVB Board"),
    ("ImcbBoard", "IMCB Board"),
    ("pibBoard", "PIB Board"),
    ("IcpBoard", "ICP Board"),
    ("imbSBoard", "IMB-S Board"),
    ("coolantLevelColor", "Coolant Level & Color"),
    ("acBlowerVane", "AC Blower Vane"),
    ("extractorVane", "Extractor Vane"),
    ("lightEngineFans", "Light Engine Fans"),
    ("cardCageFans", "Card Cage Fans"),
    ("radiatorFanPump", "Radiator Fan Pump"),
    ("pumpConnectorHose", "Pump Connector & Hose"),
    ("securityLampHouseLock", "Security Lamp House Lock"),
    ("lampLocMechanism", "Lamp LOC Mechanism"),
    ("acStatus", "AC Status"),
    ("leStatus", "LE Status"),
    ("AirIntakeLadRad", "Disposable Consumables"),
    ("pixelDefects", "Pixel Defects"),
    ("imageVibration", "Image Vibration"),
    ("liteloc", "LiteLOC Status"),
)

OK_STATUS_VALUES = frozenset({"ok", "working", "none", "not available", "yes"})


def _safe(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _first(*values: object) -> str:
    for value in values:
        if value:
            return str(value)
    return ""


def _parse_datetime(value: object) -> datetime | None:
    text = _safe(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: object) -> str:
    """Render an ISO date/time as ``DD/MM/YYYY``; other text passes through."""
    parsed = _parse_datetime(value)
    if parsed is None:
        return _safe(value)
    return parsed.strftime("%d/%m/%Y")


def format_datetime(value: object) -> str:
    parsed = _parse_datetime(value)
    if parsed is None:
        return _safe(value)
    return parsed.strftime("%d/%m/%Y %H:%M")


def _status(work: dict[str, Any], key: str) -> StatusItem:
    return StatusItem(status=_safe(work.get(f"{key}Note")), yes_no=_safe(work.get(key)))


def _color(work: dict[str, Any], prefix: str) -> ColorReading:
    return ColorReading(
        fl=_safe(work.get(f"{prefix}fl")),
        x=_safe(work.get(f"{prefix}x")),
        y=_safe(work.get(f"{prefix}y")),
    )


def _recommended_parts(raw: object) -> list[RecommendedPart]:
    if not isinstance(raw, list):
        return []
    return [RecommendedPart.from_dict(part) for part in raw if isinstance(part, dict)]


def _images_link(
    record: dict[str, Any], work: dict[str, Any], service_id: str | None, base_url: str
) -> str:
    drive_link = _safe(work.get("photosDriveLink"))
    if drive_link:
        return drive_link
    has_images = any(
        isinstance(record.get(key), list) and record.get(key)
        for key in ("images", "afterImages", "brokenImages")
    )
    if not has_images or not service_id:
        return ""
    return f"{base_url}/admin/services/{service_id}/images"


def detect_issues(work_details: dict[str, Any]) -> list[DetectedIssue]:
    """List status fields whose value is not an OK-equivalent.

    Each issue is followed by a ``"<label> Note"`` entry when the record has an
    issue note for that field.
    """
    notes = work_details.get("issueNotes")
    notes = notes if isinstance(notes, dict) else {}
    issues: list[DetectedIssue] = []
    for key, label in ISSUE_STATUS_FIELDS:
        raw = _safe(work_details.get(key))
        if not raw:
            continue
        if raw.strip().lower() in OK_STATUS_VALUES:
            continue
        issues.append(DetectedIssue(label=label, value=raw))
        if notes.get(key):
            issues.append(DetectedIssue(label=f"{label} Note", value=_safe(notes[key])))
    return issues


def map_service_record(
    record: dict[str, Any],
    *,
    service_id: str | None = None,
    images_base_url: str = "",
) -> MaintenanceReportData:
    """Build :class:`MaintenanceReportData` from a persisted service record."""
    site = record.get("site") if isinstance(record.get("site"), dict) else {}
    projector = record.get("projector") if isinstance(record.get("projector"), dict) else {}
    work = record.get("workDetails") if isinstance(record.get("workDetails"), dict) else {}
    signatures = record.get("signatures") if isinstance(record.get("signatures"), dict) else {}
    service_id = service_id or _safe(record.get("id")) or None

    engineer = _safe(record.get("engineerName"))
    service_number = record.get("serviceNumber")
    if engineer:
        service_visit = f"{engineer} - {convert_service_visit_to_text(service_number)}"
    else:
        service_visit = _safe(service_number)

    exhaust = _safe(work.get("exhaustCfm"))
    le_parts = [_safe(work.get("leStatus")).strip(), _safe(work.get("leStatusNote")).strip()]

    return MaintenanceReportData(
        cinema_name=_first(record.get("cinemaName"), site.get("name")),
        date=format_date(record.get("date")) if record.get("date") else "",
        address=_first(record.get("address"), site.get("address")),
        contact_details=_first(record.get("contactDetails"), site.get("contactDetails")),
        location=_safe(record.get("location")),
        screen_no=_first(record.get("screenNumber"), site.get("screenNo")),
        service_visit=service_visit,
        projector_model=_safe(projector.get("model")),
        serial_no=_safe(projector.get("serialNo")),
        running_hours=_safe(record.get("projectorRunningHours")),
        projector_environment=_safe(work.get("projectorPlacementEnvironment")),
        start_time=format_datetime(work.get("startTime")) if work.get("startTime") else "",
        end_time=format_datetime(work.get("endTime")) if work.get("endTime") else "",
        opticals=Opticals(
            reflector=_status(work, "reflector"),
            uv_filter=_status(work, "uvFilter"),
            integrator_rod=_status(work, "integratorRod"),
            cold_mirror=_status(work, "coldMirror"),
            fold_mirror=_status(work, "foldMirror"),
        ),
        electronics=Electronics(
            touch_panel=_status(work, "touchPanel"),
            evb_board=_status(work, "evbBoard"),
            imcb_board=_status(work, "ImcbBoard"),
            pib_board=_status(work, "pibBoard"),
            icp_board=_status(work, "IcpBoard"),
            imb_s_board=_status(work, "imbSBoard"),
        ),
        serial_verified=_status(work, "serialNumberVerified"),
        air_intake_lad_rad=_status(work, "AirIntakeLadRad"),
        coolant=_status(work, "coolantLevelColor"),
        light_engine_test=LightEngineTest(
            white=_status(work, "lightEngineWhite"),
            red=_status(work, "lightEngineRed"),
            green=_status(work, "lightEngineGreen"),
            blue=_status(work, "lightEngineBlue"),
            black=_status(work, "lightEngineBlack"),
        ),
        mechanical=Mechanical(
            ac_blower=_status(work, "acBlowerVane"),
            extractor=_status(work, "extractorVane"),
            exhaust_cfm=StatusItem(status=exhaust, yes_no="OK" if exhaust else ""),
            light_engine_4_fans=_status(work, "lightEngineFans"),
            card_cage_fans=_status(work, "cardCageFans"),
            radiator_fan=_status(work, "radiatorFanPump"),
            connector_hose=_status(work, "pumpConnectorHose"),
            security_lock=_status(work, "securityLampHouseLock"),
        ),
        lamp_loc=_status(work, "lampLocMechanism"),
        lamp_make=_safe(work.get("lampMakeModel")),
        lamp_hours=_safe(work.get("lampTotalRunningHours")),
        current_lamp_hours=_safe(work.get("lampCurrentRunningHours")),
        voltage_params=VoltageParams(
            pvn=_safe(work.get("pvVsN")),
            pve=_safe(work.get("pvVsE")),
            nve=_safe(work.get("nvVsE")),
        ),
        fl_before=_safe(work.get("flLeft")),
        fl_after=_safe(work.get("flRight")),
        content_player=_safe(work.get("contentPlayerModel")),
        ac_status=_safe(work.get("acStatus")),
        le_status=" - ".join(p for p in le_parts if p),
        remarks=_safe(record.get("remarks") or work.get("remarks")),
        le_serial_no=_safe(work.get("lightEngineSerialNumber")),
        mcgd_data=McgdData(
            white_2k=_color(work, "white2K"),
            white_4k=_color(work, "white4K"),
            red_2k=_color(work, "red2K"),
            red_4k=_color(work, "red4K"),
            green_2k=_color(work, "green2K"),
            green_4k=_color(work, "green4K"),
            blue_2k=_color(work, "blue2K"),
            blue_4k=_color(work, "blue4K"),
        ),
        cie_xyz_2k=_color(work, "BW_Step_10_2K"),
        cie_xyz_4k=_color(work, "BW_Step_10_4K"),
        software_version=_safe(work.get("softwareVersion")),
        screen_info=ScreenInfo(
            scope=ScreenDimensions(
                height=_safe(work.get("screenHeight")),
                width=_safe(work.get("screenWidth")),
                gain=_safe(work.get("screenGain")),
            ),
            flat=ScreenDimensions(
                height=_safe(work.get("flatHeight")),
                width=_safe(work.get("flatWidth")),
                gain=_safe(work.get("screenGain")),
            ),
            make=_safe(work.get("screenMake")),
        ),
        throw_distance=_safe(work.get("throwDistance")),
        image_evaluation=ImageEvaluation(
            focus_boresite=_safe(work.get("focusBoresight")),
            integrator_position=_safe(work.get("integratorPosition")),
            spot_on_screen=_safe(work.get("spotsOnScreen")),
            screen_cropping=_safe(work.get("screenCroppingOk")),
            convergence=_safe(work.get("convergenceOk")),
            channels_checked=_safe(work.get("channelsCheckedOk")),
            pixel_defects=_safe(work.get("pixelDefects")),
            image_vibration=_safe(work.get("imageVibration")),
            lite_loc=_safe(work.get("liteloc")),
        ),
        air_pollution=AirPollution(
            air_pollution_level=_safe(work.get("airPollutionLevel")),
            hcho=_safe(work.get("hcho")),
            tvoc=_safe(work.get("tvoc")),
            pm10=_safe(work.get("pm10")),
            pm25=_safe(work.get("pm2_5")),
            pm100=_safe(work.get("pm1")),
            temperature=_safe(work.get("temperature")),
            humidity=_safe(work.get("humidity")),
        ),
        recommended_parts=_recommended_parts(work.get("recommendedParts")),
        engineer_signature_url=_first(
            signatures.get("engineer"), signatures.get("engineerSignatureUrl")
        ),
        site_signature_url=_first(signatures.get("site"), signatures.get("siteSignatureUrl")),
        images_link=_images_link(record, work, service_id, images_base_url),
        detected_issues=detect_issues(work),
    )
