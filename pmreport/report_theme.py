from __future__ import annotations

# Print-friendly monochrome table styling with the service-desk brand accent.
REPORT_COLORS = {
    "ink": "#000000",
    "border": "#000000",
    "brand": "#3399cc",
    "contact_bg": "#f2f2f2",
    "text_muted": "#6b6e78",
}

REPORT_TITLE = "EW - Preventive Maintenance Report"

# Fixed letterhead box on page 1; not part of the report data.
CONTACT_TEMPLATE = {
    "heading": "Contact Details",
    "address": "9, Community Centre, 2nd Floor, Phase I, Mayapuri, New Delhi, Delhi 110064",
    "landline": "011-45501226",
    "mobile": "8882475207",
    "email": "helpdesk@ascompinc.in",
}

LOGO_FALLBACK_LABELS = {
    "left": "ASCOMP INC.",
    "right": "CHRISTIE",
}
