from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CacheEntryStatus(BaseModel):
    url: str
    age: int
    expires: int


class CacheStatus(BaseModel):
    cache_size: int
    cache_duration: int
    entries: List[CacheEntryStatus] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CacheCleared(BaseModel):
    message: str
