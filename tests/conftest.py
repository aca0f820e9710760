"""Shared test helpers for the pmreport test suite."""

from __future__ import annotations

from io import BytesIO
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# PDF helpers
# ---------------------------------------------------------------------------


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF byte string using pypdf."""
    from pypdf import PdfReader

    reader = PdfReader(BytesIO(pdf_bytes))
    return "\n".join((page.extract_text() or "") for page in reader.pages)


def pdf_page_sizes(pdf_bytes: bytes) -> list[tuple[float, float]]:
    from pypdf import PdfReader

    reader = PdfReader(BytesIO(pdf_bytes))
    return [(float(p.mediabox.width), float(p.mediabox.height)) for p in reader.pages]


def make_image_bytes(fmt: str = "PNG", size: tuple[int, int] = (400, 160)) -> bytes:
    """Encode a small solid image with Pillow."""
    from PIL import Image

    buf = BytesIO()
    Image.new("RGB", size, (20, 40, 200)).save(buf, format=fmt)
    return buf.getvalue()


def fixed_width(text: str, font: str, size: float) -> float:
    """Text measure where every character is 5pt wide, for predictable wrapping."""
    return 5.0 * len(text)


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------


def _status(status: str = "", yes_no: str = "") -> dict[str, str]:
    return {"status": status, "yesNo": yes_no}


def empty_report_dict() -> dict[str, Any]:
    """Report-data dict with every status blank and every measurement empty."""
    blank = _status()
    color = {"fl": "", "x": "", "y": ""}
    return {
        "cinemaName": "",
        "date": "",
        "address": "",
        "contactDetails": "",
        "location": "",
        "screenNo": "",
        "serviceVisit": "",
        "projectorModel": "",
        "serialNo": "",
        "runningHours": "",
        "opticals": {k: blank for k in ("reflector", "uvFilter", "integratorRod", "coldMirror", "foldMirror")},
        "electronics": {
            k: blank
            for k in ("touchPanel", "evbBoard", "ImcbBoard", "pibBoard", "IcpBoard", "imbSBoard")
        },
        "serialVerified": blank,
        "AirIntakeLadRad": blank,
        "coolant": blank,
        "lightEngineTest": {k: blank for k in ("white", "red", "green", "blue", "black")},
        "mechanical": {
            k: blank
            for k in (
                "acBlower",
                "extractor",
                "exhaustCFM",
                "lightEngine4Fans",
                "cardCageFans",
                "radiatorFan",
                "connectorHose",
                "securityLock",
            )
        },
        "lampLOC": blank,
        "lampMake": "",
        "lampHours": "",
        "currentLampHours": "",
        "voltageParams": {"pvn": "", "pve": "", "nve": ""},
        "flBefore": "",
        "flAfter": "",
        "contentPlayer": "",
        "acStatus": "",
        "leStatus": "",
        "remarks": "",
        "leSerialNo": "",
        "mcgdData": {
            k: color
            for k in ("white2K", "white4K", "red2K", "red4K", "green2K", "green4K", "blue2K", "blue4K")
        },
        "cieXyz2K": color,
        "cieXyz4K": color,
        "softwareVersion": "",
        "screenInfo": {
            "scope": {"height": "", "width": "", "gain": ""},
            "flat": {"height": "", "width": "", "gain": ""},
            "make": "",
        },
        "throwDistance": "",
        "imageEvaluation": {},
        "airPollution": {},
        "recommendedParts": [],
    }


def full_report_dict() -> dict[str, Any]:
    d = empty_report_dict()
    d.update(
        {
            "cinemaName": "PVR Saket",
            "date": "12/03/2025",
            "address": "Select Citywalk, Saket, New Delhi",
            "contactDetails": "R. Sharma 9810000000",
            "location": "Delhi",
            "screenNo": "3",
            "serviceVisit": "2",
            "projectorModel": "CP2220",
            "serialNo": "SN-44120",
            "runningHours": "23110",
            "lampMake": "OSRAM 3kW",
            "lampHours": "1840",
            "currentLampHours": "420",
            "voltageParams": {"pvn": "230", "pve": "228", "nve": "2"},
            "flBefore": "12.1",
            "flAfter": "14.0",
            "contentPlayer": "IMS3000",
            "acStatus": "Working",
            "leStatus": {"status": "Removed", "remarks": "sent for cleaning"},
            "remarks": "Cleaned optics and replaced air filters.",
            "leSerialNo": "LE-0091",
            "softwareVersion": "4.8.2",
            "throwDistance": "22.5",
            "imageEvaluation": {"focusBoresite": "yes", "liteLOC": {"status": "", "yesNo": "NO"}},
            "airPollution": {"airPollutionLevel": "Moderate", "hcho": "0.02", "pm25": "41"},
            "recommendedParts": [
                {"partNumber": "000-101234-01", "description": "Air filter, light engine intake"},
            ],
        }
    )
    d["opticals"]["reflector"] = _status("Clean", "yes")
    d["mechanical"]["exhaustCFM"] = _status("820", "OK")
    return d


def service_record_dict() -> dict[str, Any]:
    return {
        "id": "svc-42",
        "date": "2025-03-12T09:30:00Z",
        "engineerName": "Arjun",
        "serviceNumber": 3,
        "projectorRunningHours": 23110,
        "site": {
            "name": "INOX Nehru Place",
            "address": "Nehru Place, New Delhi",
            "contactDetails": "Manager 011-2600000",
            "screenNo": "2",
        },
        "projector": {"model": "CP4230", "serialNo": "SN-9001"},
        "remarks": "All good",
        "signatures": {"engineer": "", "siteSignatureUrl": ""},
        "images": ["a.jpg"],
        "workDetails": {
            "reflector": "OK",
            "reflectorNote": "Clean",
            "uvFilter": "Replaced (old one cracked)",
            "uvFilterNote": "Cracked filter",
            "ImcbBoard": "Yes",
            "leStatus": "Removed",
            "leStatusNote": "sent to lab",
            "exhaustCfm": "760",
            "startTime": "2025-03-12T09:30:00",
            "endTime": "2025-03-12T12:05:00",
            "flLeft": "10.5",
            "flRight": "13.9",
            "pm2_5": "35",
            "pm1": "12",
            "pm10": "48",
            "BW_Step_10_2Kx": "0.313",
            "BW_Step_10_2Ky": "0.329",
            "BW_Step_10_2Kfl": "14.1",
            "white2Kfl": "14.0",
            "white2Kx": "0.314",
            "white2Ky": "0.351",
            "focusBoresight": "Yes",
            "liteloc": "Faulty",
            "recommendedParts": [
                {"name": "Lamp house fan assembly for CP4230 series", "part_number": "003-005210-01"}
            ],
            "issueNotes": {"uvFilter": "Order replacement"},
        },
    }


@pytest.fixture
def empty_report() -> dict[str, Any]:
    return empty_report_dict()


@pytest.fixture
def full_report() -> dict[str, Any]:
    return full_report_dict()


@pytest.fixture
def service_record() -> dict[str, Any]:
    return service_record_dict()
