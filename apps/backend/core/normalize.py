"""
Normalization of extracted job data into JobRecords.

Guarantees every emitted record has a non-empty title and description,
stamps provenance and an id, and bounds description length per source.
Applying normalize() to an already-normalized record is a no-op.
"""

import time
from typing import Any, Dict, Optional, Union

from core.errors import MalformedInput
from core.models import JobRecord, JobSource, JobStub

DEFAULT_TITLE = "Job Position"
DEFAULT_COMPANY = "Company"
DEFAULT_LOCATION = "Location not specified"
DEFAULT_DESCRIPTION = "No detailed description available."

# Hard cap on description length per source
DESCRIPTION_CAPS = {
    JobSource.AWIGN: 5000,
    JobSource.INDEED: 5000,
    JobSource.MANUAL: 8000,
}

MIN_MANUAL_DESCRIPTION = 20


def make_job_id(prefix: str, index: Optional[int] = None) -> str:
    """Time-based id, unique within one crawl run via the index."""
    millis = int(time.time() * 1000)
    if index is None:
        return f"{prefix}-{millis}"
    return f"{prefix}-{index}-{millis}"


def _text(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _as_dict(raw: Union[JobRecord, JobStub, Dict]) -> Dict:
    if isinstance(raw, JobRecord):
        return raw.model_dump()
    if isinstance(raw, JobStub):
        return raw.to_dict()
    return dict(raw)


def truncate(text: str, cap: Optional[int]) -> str:
    if cap and len(text) > cap:
        return text[:cap].rstrip()
    return text


def normalize(
    raw: Union[JobRecord, JobStub, Dict],
    source: Optional[Union[JobSource, str]] = None,
    index: Optional[int] = None,
    cap: Optional[int] = None
) -> JobRecord:
    """
    Build a JobRecord from raw extraction output.

    An existing ``source`` or ``id`` on the input wins over the arguments, so
    re-normalizing a record never changes its provenance.
    """
    data = _as_dict(raw)

    source_value = data.get('source') or source
    if not source_value:
        raise MalformedInput("Job source is required")
    try:
        job_source = JobSource(source_value)
    except ValueError:
        raise MalformedInput(f"Unknown job source: {source_value}")

    description_cap = cap or DESCRIPTION_CAPS[job_source]
    description = truncate(_text(data.get('description')), description_cap)

    return JobRecord(
        id=_text(data.get('id')) or make_job_id(job_source.value, index),
        title=_text(data.get('title')) or DEFAULT_TITLE,
        company=_text(data.get('company')) or DEFAULT_COMPANY,
        location=_text(data.get('location')) or DEFAULT_LOCATION,
        description=description or DEFAULT_DESCRIPTION,
        url=_text(data.get('url')),
        source=job_source,
    )


def build_manual_job(
    title: Optional[str],
    description: str,
    company: Optional[str] = None,
    location: Optional[str] = None,
    url: str = ''
) -> JobRecord:
    """
    Record for a job the user pasted in by hand after a blocked fetch.

    Only the description is required; a missing title or company falls back
    to the usual defaults.
    """
    if len(_text(description)) < MIN_MANUAL_DESCRIPTION:
        raise MalformedInput(
            f"Job description must be at least {MIN_MANUAL_DESCRIPTION} characters"
        )
    return normalize(
        {
            'id': make_job_id('manual'),
            'title': title,
            'company': company,
            'location': location,
            'description': description,
            'url': url,
        },
        source=JobSource.MANUAL,
    )
