# blt_query/params.py

from typing import Annotated, Iterable, Literal, Optional, Union
from urllib.parse import urlencode

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field


Number = Union[int, float]
PositiveNumber = Union[Annotated[int, Field(gt=0)], Annotated[float, Field(gt=0, allow_inf_nan=False)]]
NonNegativeNumber = Union[Annotated[int, Field(ge=0)], Annotated[float, Field(ge=0, allow_inf_nan=False)]]


class QueryFilter(BaseModel):
	"""A single equality constraint, e.g. ``severity=high``."""

	model_config = ConfigDict(frozen=True)

	field: str
	operator: Literal["="] = "="
	value: str


class QuerySort(BaseModel):
	model_config = ConfigDict(frozen=True)

	field: str
	direction: Literal["asc", "desc"] = "asc"

	def to_param(self) -> str:
		return f"-{self.field}" if self.direction == "desc" else self.field


class ParsedQuery(BaseModel):
	"""
	Structured form of a resource URI query string.

	``sort``, ``limit`` and ``offset`` are ``None`` when the URI did not set
	them (or set them to something unusable); ``filters`` keeps the order and
	the duplicates of the original query string.
	"""

	model_config = ConfigDict(frozen=True)

	filters: tuple[QueryFilter, ...] = ()
	sort: Optional[QuerySort] = None
	limit: Optional[PositiveNumber] = None
	offset: Optional[NonNegativeNumber] = None

	def filters_for(self, field: str) -> tuple[QueryFilter, ...]:
		return tuple(f for f in self.filters if f.field == field)

	def without_filters(self, fields: Iterable[str]) -> "ParsedQuery":
		"""Return a copy without the filters on any of ``fields``."""
		dropped = set(fields)
		return self.model_copy(update={"filters": tuple(f for f in self.filters if f.field not in dropped)})

	def to_dict(self) -> dict:
		return self.model_dump(exclude_none=True)

	def to_query_string(self) -> str:
		pairs = [(f.field, f.value) for f in self.filters]
		if self.sort is not None:
			pairs.append(("sort", self.sort.to_param()))
		if self.limit is not None:
			pairs.append(("limit", str(self.limit)))
		if self.offset is not None:
			pairs.append(("offset", str(self.offset)))
		return urlencode(pairs)


class ResourceQueryParams:
	# Declared as plain strings so bad values are dropped by the parser
	# instead of being rejected with a 422 by FastAPI.
	def __init__(
		self,
		sort: Optional[str] = Query(None, description="Field to sort by, prefix with '-' for descending", examples=["-created_at"]),
		limit: Optional[str] = Query(None, description="Maximum number of results (> 0)", examples=["10"]),
		offset: Optional[str] = Query(None, description="Number of results to skip (>= 0)", examples=["0"])
	):
		self.sort = sort
		self.limit = limit
		self.offset = offset
