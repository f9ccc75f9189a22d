from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .common import Timestamp


class Warning(BaseModel):
    code: str
    message: str
    record_id: Optional[str] = None


class Admission(BaseModel):
    kind: Literal["admission"] = "admission"
    id: str
    name: Optional[str] = None
    mrn: Optional[str] = None
    department: Optional[str] = None
    admission_date: Optional[Timestamp] = None
    diagnosis: Optional[str] = None
    doctor_name: Optional[str] = None
    safety_type: Optional[str] = None
    status: Optional[str] = None


class Consultation(BaseModel):
    kind: Literal["consultation"] = "consultation"
    id: str
    patient_name: Optional[str] = None
    mrn: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    requesting_department: Optional[str] = None
    patient_location: Optional[str] = None
    consultation_specialty: Optional[str] = None
    created_at: Optional[Timestamp] = None
    urgency: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None
    doctor_name: Optional[str] = None


class Appointment(BaseModel):
    kind: Literal["appointment"] = "appointment"
    id: str
    patient_name: Optional[str] = None
    medical_number: Optional[str] = None
    specialty: Optional[str] = None
    created_at: Optional[Timestamp] = None
    appointment_type: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


Record = Annotated[Union[Admission, Consultation, Appointment], Field(discriminator="kind")]


class RecordBundle(BaseModel):
    """Already-fetched record collections handed over by the store."""
    admissions: list[Admission] = Field(default_factory=list)
    consultations: list[Consultation] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)


class ReportConfig(BaseModel):
    """Page geometry and report constants. Lengths are in millimetres (A4 portrait)."""
    page_width: float = Field(default=210.0, gt=0)
    page_height: float = Field(default=297.0, gt=0)
    left_margin: float = Field(default=14.0, ge=0)
    right_margin: float = Field(default=14.0, ge=0)
    top_margin: float = Field(default=15.0, ge=0)
    bottom_margin: float = Field(default=20.0, ge=0)
    row_height: float = Field(default=7.0, gt=0)
    title_height: float = Field(default=10.0, ge=0)
    section_gap: float = Field(default=15.0, ge=0)
    footer_offset: float = Field(default=10.0, ge=0)
    title_font_size: float = 20
    subtitle_font_size: float = 12
    section_font_size: float = 14
    header_font_size: float = 10
    body_font_size: float = 9
    footer_font_size: float = 10
    report_title: str = "IMD-Care Report"
    admin_report_title: str = "Administrative Report"
    bed_capacity: int = Field(default=100, ge=0)

    @property
    def content_width(self) -> float:
        return self.page_width - self.left_margin - self.right_margin

    @property
    def body_height(self) -> float:
        return self.page_height - self.top_margin - self.bottom_margin


class ArtifactRef(BaseModel):
    uri: str = Field(min_length=1, max_length=500)
    sha256: str = Field(pattern=r"^[a-f0-9]{64}$")
    bytes: int = Field(ge=1)


class ReportExports(BaseModel):
    pdf: ArtifactRef
    csv: Optional[ArtifactRef] = None
    document_json: Optional[ArtifactRef] = None
