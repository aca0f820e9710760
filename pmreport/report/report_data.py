"""Report model for the maintenance PDF.

``MaintenanceReportData`` is the single record the layout engine consumes.
Every ``from_dict`` constructor is tolerant: missing keys, ``None`` and
non-mapping inputs all produce empty strings rather than errors, so a sparse
record still renders a complete two-page document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Normalisation helpers
# ---------------------------------------------------------------------------

_ORDINAL_WORDS: dict[str, str] = {
    "first": "First",
    "second": "Second",
    "third": "Third",
    "fourth": "Fourth",
    "fifth": "Fifth",
    "sixth": "Sixth",
    "seventh": "Seventh",
    "eighth": "Eighth",
    "ninth": "Ninth",
    "tenth": "Tenth",
    "special": "Special",
}

_ORDINALS_BY_NUMBER = (
    "",
    "First",
    "Second",
    "Third",
    "Fourth",
    "Fifth",
    "Sixth",
    "Seventh",
    "Eighth",
    "Ninth",
    "Tenth",
)


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _mapping(value: object) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _leading_int(text: str) -> int | None:
    """Parse the leading integer of *text* (``"7th"`` -> 7), or ``None``."""
    digits = ""
    for idx, ch in enumerate(text):
        if ch.isdigit():
            digits += ch
        elif idx == 0 and ch in "+-":
            digits += ch
        else:
            break
    if digits in ("", "+", "-"):
        return None
    return int(digits)


def normalize_yes_no(value: str | None) -> str:
    """Canonicalise ``yes``/``no`` flags; anything else passes through verbatim."""
    if not value:
        return ""
    lowered = value.strip().lower()
    if lowered == "yes":
        return "Yes"
    if lowered == "no":
        return "No"
    return value


def convert_service_visit_to_text(value: str | int | None) -> str:
    """Return the ordinal word for a service-visit number or label.

    ``1`` and ``"first"`` both become ``"First"``; numbers outside 1-10 become
    ``"<n>th"``; any other text is returned with its first letter capitalised.
    """
    if value is None or value == "" or value == 0:
        return ""
    text = str(value).strip()
    if not text:
        return ""
    known = _ORDINAL_WORDS.get(text.lower())
    if known:
        return known
    number = _leading_int(text)
    if number is not None:
        if 0 < number < len(_ORDINALS_BY_NUMBER):
            return _ORDINALS_BY_NUMBER[number]
        return f"{number}th"
    return text[0].upper() + text[1:]


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class StatusItem:
    status: str = ""
    yes_no: str = ""

    @classmethod
    def from_dict(cls, d: object) -> StatusItem:
        d = _mapping(d)
        return cls(
            status=_text(d.get("status")),
            yes_no=_text(d.get("yesNo", d.get("yes_no"))),
        )


@dataclass
class Opticals:
    reflector: StatusItem = field(default_factory=StatusItem)
    uv_filter: StatusItem = field(default_factory=StatusItem)
    integrator_rod: StatusItem = field(default_factory=StatusItem)
    cold_mirror: StatusItem = field(default_factory=StatusItem)
    fold_mirror: StatusItem = field(default_factory=StatusItem)

    @classmethod
    def from_dict(cls, d: object) -> Opticals:
        d = _mapping(d)
        return cls(
            reflector=StatusItem.from_dict(d.get("reflector")),
            uv_filter=StatusItem.from_dict(d.get("uvFilter")),
            integrator_rod=StatusItem.from_dict(d.get("integratorRod")),
            cold_mirror=StatusItem.from_dict(d.get("coldMirror")),
            fold_mirror=StatusItem.from_dict(d.get("foldMirror")),
        )


@dataclass
class Electronics:
    touch_panel: StatusItem = field(default_factory=StatusItem)
    evb_board: StatusItem = field(default_factory=StatusItem)
    imcb_board: StatusItem = field(default_factory=StatusItem)
    pib_board: StatusItem = field(default_factory=StatusItem)
    icp_board: StatusItem = field(default_factory=StatusItem)
    imb_s_board: StatusItem = field(default_factory=StatusItem)

    @classmethod
    def from_dict(cls, d: object) -> Electronics:
        d = _mapping(d)
        return cls(
            touch_panel=StatusItem.from_dict(d.get("touchPanel")),
            evb_board=StatusItem.from_dict(d.get("evbBoard")),
            imcb_board=StatusItem.from_dict(d.get("ImcbBoard", d.get("imcbBoard"))),
            pib_board=StatusItem.from_dict(d.get("pibBoard")),
            icp_board=StatusItem.from_dict(d.get("IcpBoard", d.get("icpBoard"))),
            imb_s_board=StatusItem.from_dict(d.get("imbSBoard")),
        )


@dataclass
class LightEngineTest:
    white: StatusItem = field(default_factory=StatusItem)
    red: StatusItem = field(default_factory=StatusItem)
    green: StatusItem = field(default_factory=StatusItem)
    blue: StatusItem = field(default_factory=StatusItem)
    black: StatusItem = field(default_factory=StatusItem)

    @classmethod
    def from_dict(cls, d: object) -> LightEngineTest:
        d = _mapping(d)
        return cls(
            white=StatusItem.from_dict(d.get("white")),
            red=StatusItem.from_dict(d.get("red")),
            green=StatusItem.from_dict(d.get("green")),
            blue=StatusItem.from_dict(d.get("blue")),
            black=StatusItem.from_dict(d.get("black")),
        )


@dataclass
class Mechanical:
    ac_blower: StatusItem = field(default_factory=StatusItem)
    extractor: StatusItem = field(default_factory=StatusItem)
    exhaust_cfm: StatusItem = field(default_factory=StatusItem)
    light_engine_4_fans: StatusItem = field(default_factory=StatusItem)
    card_cage_fans: StatusItem = field(default_factory=StatusItem)
    radiator_fan: StatusItem = field(default_factory=StatusItem)
    connector_hose: StatusItem = field(default_factory=StatusItem)
    security_lock: StatusItem = field(default_factory=StatusItem)

    @classmethod
    def from_dict(cls, d: object) -> Mechanical:
        d = _mapping(d)
        return cls(
            ac_blower=StatusItem.from_dict(d.get("acBlower")),
            extractor=StatusItem.from_dict(d.get("extractor")),
            exhaust_cfm=StatusItem.from_dict(d.get("exhaustCFM")),
            light_engine_4_fans=StatusItem.from_dict(d.get("lightEngine4Fans")),
            card_cage_fans=StatusItem.from_dict(d.get("cardCageFans")),
            radiator_fan=StatusItem.from_dict(d.get("radiatorFan")),
            connector_hose=StatusItem.from_dict(d.get("connectorHose")),
            security_lock=StatusItem.from_dict(d.get("securityLock")),
        )


@dataclass
class VoltageParams:
    pvn: str = ""
    pve: str = ""
    nve: str = ""

    @classmethod
    def from_dict(cls, d: object) -> VoltageParams:
        d = _mapping(d)
        return cls(pvn=_text(d.get("pvn")), pve=_text(d.get("pve")), nve=_text(d.get("nve")))


@dataclass
class ColorReading:
    """One MCGD channel or CIE test pattern: luminance (fL) and chromaticity."""

    fl: str = ""
    x: str = ""
    y: str = ""

    @classmethod
    def from_dict(cls, d: object) -> ColorReading:
        d = _mapping(d)
        return cls(fl=_text(d.get("fl")), x=_text(d.get("x")), y=_text(d.get("y")))


@dataclass
class McgdData:
    white_2k: ColorReading = field(default_factory=ColorReading)
    white_4k: ColorReading = field(default_factory=ColorReading)
    red_2k: ColorReading = field(default_factory=ColorReading)
    red_4k: ColorReading = field(default_factory=ColorReading)
    green_2k: ColorReading = field(default_factory=ColorReading)
    green_4k: ColorReading = field(default_factory=ColorReading)
    blue_2k: ColorReading = field(default_factory=ColorReading)
    blue_4k: ColorReading = field(default_factory=ColorReading)

    @classmethod
    def from_dict(cls, d: object) -> McgdData:
        d = _mapping(d)
        return cls(
            white_2k=ColorReading.from_dict(d.get("white2K")),
            white_4k=ColorReading.from_dict(d.get("white4K")),
            red_2k=ColorReading.from_dict(d.get("red2K")),
            red_4k=ColorReading.from_dict(d.get("red4K")),
            green_2k=ColorReading.from_dict(d.get("green2K")),
            green_4k=ColorReading.from_dict(d.get("green4K")),
            blue_2k=ColorReading.from_dict(d.get("blue2K")),
            blue_4k=ColorReading.from_dict(d.get("blue4K")),
        )

    def rows(self) -> list[tuple[str, ColorReading]]:
        return [
            ("W2K", self.white_2k),
            ("W4K", self.white_4k),
            ("R2K", self.red_2k),
            ("R4K", self.red_4k),
            ("G2K", self.green_2k),
            ("G4K", self.green_4k),
            ("B2K", self.blue_2k),
            ("B4K", self.blue_4k),
        ]


@dataclass
class ScreenDimensions:
    height: str = ""
    width: str = ""
    gain: str = ""

    @classmethod
    def from_dict(cls, d: object) -> ScreenDimensions:
        d = _mapping(d)
        return cls(
            height=_text(d.get("height")),
            width=_text(d.get("width")),
            gain=_text(d.get("gain")),
        )


@dataclass
class ScreenInfo:
    scope: ScreenDimensions = field(default_factory=ScreenDimensions)
    flat: ScreenDimensions = field(default_factory=ScreenDimensions)
    make: str = ""

    @classmethod
    def from_dict(cls, d: object) -> ScreenInfo:
        d = _mapping(d)
        return cls(
            scope=ScreenDimensions.from_dict(d.get("scope")),
            flat=ScreenDimensions.from_dict(d.get("flat")),
            make=_text(d.get("make")),
        )


def _evaluation_value(value: object) -> str:
    # Older service records store each check as a StatusItem; the flag is what prints.
    if isinstance(value, dict):
        return _text(value.get("yesNo", value.get("yes_no")))
    return _text(value)


@dataclass
class ImageEvaluation:
    focus_boresite: str = ""
    integrator_position: str = ""
    spot_on_screen: str = ""
    screen_cropping: str = ""
    convergence: str = ""
    channels_checked: str = ""
    pixel_defects: str = ""
    image_vibration: str = ""
    lite_loc: str = ""

    @classmethod
    def from_dict(cls, d: object) -> ImageEvaluation:
        d = _mapping(d)
        return cls(
            focus_boresite=_evaluation_value(d.get("focusBoresite")),
            integrator_position=_evaluation_value(d.get("integratorPosition")),
            spot_on_screen=_evaluation_value(d.get("spotOnScreen")),
            screen_cropping=_evaluation_value(d.get("screenCropping")),
            convergence=_evaluation_value(d.get("convergence")),
            channels_checked=_evaluation_value(d.get("channelsChecked")),
            pixel_defects=_evaluation_value(d.get("pixelDefects")),
            image_vibration=_evaluation_value(d.get("imageVibration")),
            lite_loc=_evaluation_value(d.get("liteLOC")),
        )


@dataclass
class AirPollution:
    air_pollution_level: str = ""
    hcho: str = ""
    tvoc: str = ""
    pm10: str = ""
    pm25: str = ""
    pm100: str = ""
    temperature: str = ""
    humidity: str = ""

    @classmethod
    def from_dict(cls, d: object) -> AirPollution:
        d = _mapping(d)
        return cls(
            air_pollution_level=_text(d.get("airPollutionLevel")),
            hcho=_text(d.get("hcho")),
            tvoc=_text(d.get("tvoc")),
            pm10=_text(d.get("pm10")),
            pm25=_text(d.get("pm25")),
            pm100=_text(d.get("pm100")),
            temperature=_text(d.get("temperature")),
            humidity=_text(d.get("humidity")),
        )


@dataclass
class RecommendedPart:
    part_number: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, d: object) -> RecommendedPart:
        d = _mapping(d)
        # camelCase / ``name`` win over the legacy snake_case / description keys
        # unless they are blank.
        part_number = d.get("partNumber") or d.get("part_number")
        description = d.get("name") or d.get("description")
        return cls(part_number=_text(part_number), description=_text(description))


@dataclass
class DetectedIssue:
    label: str
    value: str

    @classmethod
    def from_dict(cls, d: object) -> DetectedIssue:
        d = _mapping(d)
        return cls(label=_text(d.get("label")), value=_text(d.get("value")))


def _le_status_text(value: object) -> str:
    if isinstance(value, dict):
        parts = [_text(value.get("status")).strip(), _text(value.get("remarks")).strip()]
        return " - ".join(p for p in parts if p)
    return _text(value)


@dataclass
class MaintenanceReportData:
    # Identification
    cinema_name: str = ""
    date: str = ""
    address: str = ""
    contact_details: str = ""
    location: str = ""
    screen_no: str = ""
    service_visit: str = ""
    projector_model: str = ""
    serial_no: str = ""
    running_hours: str = ""
    projector_environment: str = ""
    start_time: str = ""
    end_time: str = ""

    # Page 1 inspection checklist
    opticals: Opticals = field(default_factory=Opticals)
    electronics: Electronics = field(default_factory=Electronics)
    serial_verified: StatusItem = field(default_factory=StatusItem)
    air_intake_lad_rad: StatusItem = field(default_factory=StatusItem)
    coolant: StatusItem = field(default_factory=StatusItem)
    light_engine_test: LightEngineTest = field(default_factory=LightEngineTest)
    mechanical: Mechanical = field(default_factory=Mechanical)
    lamp_loc: StatusItem = field(default_factory=StatusItem)

    # Page 2 measurements
    lamp_make: str = ""
    lamp_hours: str = ""
    current_lamp_hours: str = ""
    voltage_params: VoltageParams = field(default_factory=VoltageParams)
    fl_before: str = ""
    fl_after: str = ""
    content_player: str = ""
    ac_status: str = ""
    le_status: str = ""
    remarks: str = ""
    le_serial_no: str = ""
    mcgd_data: McgdData = field(default_factory=McgdData)
    cie_xyz_2k: ColorReading = field(default_factory=ColorReading)
    cie_xyz_4k: ColorReading = field(default_factory=ColorReading)
    software_version: str = ""
    screen_info: ScreenInfo = field(default_factory=ScreenInfo)
    throw_distance: str = ""
    image_evaluation: ImageEvaluation = field(default_factory=ImageEvaluation)
    air_pollution: AirPollution = field(default_factory=AirPollution)
    recommended_parts: list[RecommendedPart] = field(default_factory=list)

    # Sign-off and extras
    engineer_signature_url: str = ""
    site_signature_url: str = ""
    images_link: str = ""
    detected_issues: list[DetectedIssue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: object) -> MaintenanceReportData:
        """Build from the camelCase JSON shape used by the web client."""
        d = _mapping(d)
        parts_raw = d.get("recommendedParts")
        issues_raw = d.get("detectedIssues")
        return cls(
            cinema_name=_text(d.get("cinemaName")),
            date=_text(d.get("date")),
            address=_text(d.get("address")),
            contact_details=_text(d.get("contactDetails")),
            location=_text(d.get("location")),
            screen_no=_text(d.get("screenNo")),
            service_visit=_text(d.get("serviceVisit")),
            projector_model=_text(d.get("projectorModel")),
            serial_no=_text(d.get("serialNo")),
            running_hours=_text(d.get("runningHours")),
            projector_environment=_text(d.get("projectorEnvironment")),
            start_time=_text(d.get("startTime")),
            end_time=_text(d.get("endTime")),
            opticals=Opticals.from_dict(d.get("opticals")),
            electronics=Electronics.from_dict(d.get("electronics")),
            serial_verified=StatusItem.from_dict(d.get("serialVerified")),
            air_intake_lad_rad=StatusItem.from_dict(d.get("AirIntakeLadRad")),
            coolant=StatusItem.from_dict(d.get("coolant")),
            light_engine_test=LightEngineTest.from_dict(d.get("lightEngineTest")),
            mechanical=Mechanical.from_dict(d.get("mechanical")),
            lamp_loc=StatusItem.from_dict(d.get("lampLOC")),
            lamp_make=_text(d.get("lampMake")),
            lamp_hours=_text(d.get("lampHours")),
            current_lamp_hours=_text(d.get("currentLampHours")),
            voltage_params=VoltageParams.from_dict(d.get("voltageParams")),
            fl_before=_text(d.get("flBefore")),
            fl_after=_text(d.get("flAfter")),
            content_player=_text(d.get("contentPlayer")),
            ac_status=_text(d.get("acStatus")),
            le_status=_le_status_text(d.get("leStatus")),
            remarks=_text(d.get("remarks")),
            le_serial_no=_text(d.get("leSerialNo")),
            mcgd_data=McgdData.from_dict(d.get("mcgdData")),
            cie_xyz_2k=ColorReading.from_dict(d.get("cieXyz2K")),
            cie_xyz_4k=ColorReading.from_dict(d.get("cieXyz4K")),
            software_version=_text(d.get("softwareVersion")),
            screen_info=ScreenInfo.from_dict(d.get("screenInfo")),
            throw_distance=_text(d.get("throwDistance")),
            image_evaluation=ImageEvaluation.from_dict(d.get("imageEvaluation")),
            air_pollution=AirPollution.from_dict(d.get("airPollution")),
            recommended_parts=[
                RecommendedPart.from_dict(p)
                for p in (parts_raw if isinstance(parts_raw, list) else [])
                if isinstance(p, dict)
            ],
            engineer_signature_url=_text(d.get("engineerSignatureUrl")),
            site_signature_url=_text(d.get("siteSignatureUrl")),
            images_link=_text(d.get("imagesLink")),
            detected_issues=[
                DetectedIssue.from_dict(i)
                for i in (issues_raw if isinstance(issues_raw, list) else [])
                if isinstance(i, dict)
            ],
        )
