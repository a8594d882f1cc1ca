from pydantic import BaseModel
from typing import Dict, List, Optional, Union

Number = Union[float, str]


class ParseTextRequest(BaseModel):
    text: str
    shape: Optional[str] = None


class NormalizedFields(BaseModel):
    shape: str
    fields: Dict[str, str]


class GradeRequest(BaseModel):
    shape: str
    tableWidth: Optional[Number] = None
    crown: Optional[Number] = None
    pavilionDepth: Optional[Number] = None
    halvesAngleAvg: Optional[Number] = None


class GradeResponse(BaseModel):
    kgs: Optional[float] = None
    bowtie: Optional[float] = None
    feye: Optional[float] = None


class FieldRuleOut(BaseModel):
    name: str
    min: float
    max: float
    step: float
    source_key: Optional[str] = None
    rounding: Optional[float] = None
    numeric: bool = True
    options: List[str] = []


class ShapeProfileOut(BaseModel):
    name: str
    fields: List[FieldRuleOut]
