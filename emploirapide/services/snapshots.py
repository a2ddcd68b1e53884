"""Job data snapshots captured for jobs this system does not own."""

import json

from emploirapide.errors import ValidationError


def parse_job_data(job_data) -> dict:
    """Accept a snapshot as a mapping or a JSON object string."""
    if isinstance(job_data, str):
        try:
            job_data = json.loads(job_data)
        except ValueError:
            raise ValidationError("jobData doit être un objet JSON") from None
    if not isinstance(job_data, dict) or not job_data:
        raise ValidationError("jobData doit être un objet JSON")
    return job_data
