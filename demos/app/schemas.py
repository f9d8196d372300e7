from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class TopicRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    description: str


class PersonRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    description: str
    web_url: Optional[str] = None
    birth_date: Optional[str] = None
    topics: List[str] = []


class ProjectRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    description: str
    web_url: Optional[str] = None
    date_founded: Optional[str] = None
    topics: List[str] = []
    avatar_url: Optional[str] = None
    blocks: List[str] = []


class SampleRecords(BaseModel):
    topics: List[TopicRecord]
    people: List[PersonRecord]
    projects: List[ProjectRecord]
