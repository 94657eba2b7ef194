import pytest  # type: ignore[import-not-found]
from pydantic import ValidationError

from portfolio.commons.ids import new_id
from portfolio.retouches.schemas import CreateRetoucheRequest, RetoucheUpdate


def test_title_is_stripped_before_length_check() -> None:
    with pytest.raises(ValidationError):
        RetoucheUpdate(title=" a ")
    with pytest.raises(ValidationError):
        CreateRetoucheRequest(
            title="  b  ",
            before_image_id=new_id(),
            after_image_id=new_id(),
            status="published",
        )
    assert RetoucheUpdate(title="  Hair ").title == "Hair"


def test_untouched_title_stays_unset() -> None:
    changes = RetoucheUpdate(status="published")
    assert "title" not in changes.model_fields_set
