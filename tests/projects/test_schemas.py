import pytest  # type: ignore[import-not-found]
from pydantic import ValidationError

from portfolio.commons.ids import new_id
from portfolio.projects.schemas import MAX_IMAGES, CreateProjectRequest, ProjectUpdate
from portfolio.seo.schemas import SEOInput


def test_image_list_is_capped() -> None:
    with pytest.raises(ValidationError):
        CreateProjectRequest(status="published", images=[new_id() for _ in range(MAX_IMAGES + 1)])
    CreateProjectRequest(status="published", images=[new_id() for _ in range(MAX_IMAGES)])


def test_text_limits() -> None:
    with pytest.raises(ValidationError):
        CreateProjectRequest(title="x" * 101, status="published")
    with pytest.raises(ValidationError):
        CreateProjectRequest(description="x" * 1001, status="published")
    with pytest.raises(ValidationError):
        SEOInput(title="x" * 61)
    with pytest.raises(ValidationError):
        SEOInput(description="x" * 161)
    with pytest.raises(ValidationError):
        SEOInput(keywords=[str(i) for i in range(11)])


def test_status_is_closed_set() -> None:
    with pytest.raises(ValidationError):
        CreateProjectRequest(status="archived")  # type: ignore[arg-type]


def test_update_tracks_only_sent_fields() -> None:
    changes = ProjectUpdate.model_validate({"title": "x", "images": []})
    assert changes.model_fields_set == {"title", "images"}
