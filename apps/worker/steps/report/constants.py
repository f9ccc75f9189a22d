"""
Fixed tables for report sections: titles, column layouts, badge maps, departments.
"""
from __future__ import annotations

from packages.shared.models import BadgeLevel, Column

ADMISSIONS_TITLE = "Active Admissions"
CONSULTATIONS_TITLE = "Medical Consultations"
APPOINTMENTS_TITLE = "Clinic Appointments"

SUMMARY_TITLE = "Summary Statistics"
DEPARTMENT_TITLE = "Department Statistics"
SAFETY_TITLE = "Safety Admission Statistics"
URGENCY_TITLE = "Consultation Urgency Distribution"

ADMISSION_COLUMNS = [
    Column(header="Patient Name", width=30),
    Column(header="MRN", width=25),
    Column(header="Department", width=30),
    Column(header="Admission Date", width=25),
    Column(header="Diagnosis", width=35),
    Column(header="Doctor", width=25),
    Column(header="Safety Type", width=20),
]

CONSULTATION_COLUMNS = [
    Column(header="Patient Name", width=30),
    Column(header="MRN", width=25),
    Column(header="Specialty", width=30),
    Column(header="Date", width=25),
    Column(header="Urgency", width=20),
    Column(header="Reason"),
]

APPOINTMENT_COLUMNS = [
    Column(header="Patient Name", width=30),
    Column(header="MRN", width=25),
    Column(header="Specialty", width=30),
    Column(header="Date", width=25),
    Column(header="Type", width=20),
    Column(header="Status", width=20),
    Column(header="Notes"),
]

SUMMARY_COLUMNS = [Column(header="Metric"), Column(header="Value", width=40)]
DEPARTMENT_COLUMNS = [
    Column(header="Department"),
    Column(header="Active Patients", width=40),
    Column(header="Pending Consultations", width=45),
]
SAFETY_COLUMNS = [Column(header="Safety Type"), Column(header="Count", width=30), Column(header="Share", width=30)]
URGENCY_COLUMNS = [Column(header="Urgency Level"), Column(header="Count", width=30), Column(header="Share", width=30)]

URGENCY_BADGES = {
    "emergency": BadgeLevel.HIGH,
    "urgent": BadgeLevel.MEDIUM,
    "routine": BadgeLevel.LOW,
}

SAFETY_BADGES = {
    "Emergency": BadgeLevel.HIGH,
    "Observation": BadgeLevel.MEDIUM,
}

APPOINTMENT_TYPE_BADGES = {
    "urgent": BadgeLevel.HIGH,
}

ACTIVE_STATUS = "active"

DEPARTMENTS = [
    "Internal Medicine",
    "Pulmonology",
    "Neurology",
    "Gastroenterology",
    "Rheumatology",
    "Endocrinology",
    "Hematology",
    "Infectious Disease",
    "Thrombosis Medicine",
    "Immunology & Allergy",
]

# RGB fills used by the PDF renderer.
HEADER_FILL = (63, 81, 181)
STRIPE_FILL = (245, 245, 245)
BADGE_COLORS = {
    BadgeLevel.HIGH: "#991B1B",
    BadgeLevel.MEDIUM: "#92400E",
    BadgeLevel.LOW: "#166534",
    BadgeLevel.INFO: "#1E40AF",
    BadgeLevel.NEUTRAL: "#1F2937",
}
