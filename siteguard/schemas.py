from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


class _Raw(BaseModel):
    # scanner payloads carry many more keys than we read
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def _object_or_none(value: Any) -> Any:
    # an optional part of the payload that is not an object is treated as absent
    return value if isinstance(value, dict) else None


def _objects_only(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(v, dict)}


def _object_list(value: Any) -> List[Any]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


SUMMARY_KEYS = ("performance", "accessibility", "seo", "bestPractices")

Score = Annotated[float, Field(ge=0.0, le=1.0, allow_inf_nan=False)]


class RawSummary(_Raw):
    performance: Score
    accessibility: Score
    seo: Score
    best_practices: Score = Field(alias="bestPractices")


# Security and fullReport leaves stay untyped: the normalizer only acts on
# exact ``True``/``False`` verdicts and skips entries it cannot use.

class SslInfo(_Raw):
    valid: Any = None


class HttpsInfo(_Raw):
    ssl: Annotated[Optional[SslInfo], BeforeValidator(_object_or_none)] = None


class SafeBrowsing(_Raw):
    safe: Any = None


class TrackersAndCookies(_Raw):
    cookie_banner: Any = Field(default=None, alias="cookieBanner")


class RawSecurity(_Raw):
    headers: Any = None
    https: Annotated[Optional[HttpsInfo], BeforeValidator(_object_or_none)] = None
    safe_browsing: Annotated[Optional[SafeBrowsing], BeforeValidator(_object_or_none)] = Field(
        default=None, alias="safeBrowsing")
    trackers_and_cookies: Annotated[Optional[TrackersAndCookies], BeforeValidator(_object_or_none)] = Field(
        default=None, alias="trackersAndCookies")

    def header(self, name: str) -> Any:
        if not isinstance(self.headers, dict):
            return None
        wanted = name.lower()
        for key, value in self.headers.items():
            if str(key).lower() == wanted:
                return value
        return None


class AuditRef(_Raw):
    id: Any = None
    weight: Any = 0


class ReportCategory(_Raw):
    audit_refs: Annotated[List[AuditRef], BeforeValidator(_object_list)] = Field(
        default_factory=list, alias="auditRefs")


class AuditRecord(_Raw):
    score: Any = None
    title: Any = ""
    description: Any = None
    display_value: Any = Field(default=None, alias="displayValue")


class FullReport(_Raw):
    categories: Annotated[Dict[str, ReportCategory], BeforeValidator(_objects_only)] = Field(default_factory=dict)
    audits: Annotated[Dict[str, AuditRecord], BeforeValidator(_objects_only)] = Field(default_factory=dict)


class RawScanResult(_Raw):
    summary: RawSummary
    security: Annotated[Optional[RawSecurity], BeforeValidator(_object_or_none)] = None
    full_report: Annotated[Optional[FullReport], BeforeValidator(_object_or_none)] = Field(
        default=None, alias="fullReport")


# ---------------------------------------------------------------------------
# Normalized report (what the API returns and the serializers consume)
# ---------------------------------------------------------------------------

class _Out(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Issue(_Out):
    id: str
    label: str
    criticality: str


class Pass(_Out):
    id: str
    label: str


class FailedAudit(_Out):
    id: str
    title: str
    description: Optional[str] = None
    score: Optional[float] = None
    display_value: Optional[str] = Field(default=None, alias="displayValue")


class NormalizedReport(_Out):
    url: str
    overall_score: Score = Field(alias="overallScore")
    summary: Dict[str, Score]
    issues: List[Issue] = Field(default_factory=list)
    passes: List[Pass] = Field(default_factory=list)
    failed_audits: Dict[str, List[FailedAudit]] = Field(default_factory=dict, alias="failedAudits")

    @field_validator("summary")
    @classmethod
    def _four_scores(cls, value: Dict[str, float]) -> Dict[str, float]:
        if set(value) != set(SUMMARY_KEYS):
            raise ValueError(f"summary must have exactly the keys {', '.join(SUMMARY_KEYS)}")
        return {k: value[k] for k in SUMMARY_KEYS}


# ---------------------------------------------------------------------------
# API request bodies
# ---------------------------------------------------------------------------

class ScanRequest(BaseModel):
    url: str = Field(min_length=1)


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price_id: Optional[str] = Field(default=None, alias="priceId")
    url: Optional[str] = None
