"""
Report document schemas
"""
from typing import List, Literal, Union
from pydantic import BaseModel, Field
from datetime import datetime


class KeyValueItem(BaseModel):
    label: str
    value: str


class KeyValueSection(BaseModel):
    """Section made of ordered label/value lines"""
    kind: Literal["key_value"] = "key_value"
    heading: str
    items: List[KeyValueItem] = []


class TableSection(BaseModel):
    """Section rendered as a table"""
    kind: Literal["table"] = "table"
    heading: str
    columns: List[str]
    rows: List[List[str]] = []


ReportSection = Union[KeyValueSection, TableSection]


class ReportDocument(BaseModel):
    """Fixed-layout movie analytics report"""
    title: str
    generated_at: datetime
    filename: str
    sections: List[ReportSection] = Field(default_factory=list)

    def section(self, heading: str) -> ReportSection:
        for section in self.sections:
            if section.heading == heading:
                return section
        raise KeyError(heading)

    def headings(self) -> List[str]:
        return [section.heading for section in self.sections]
