"""Form lifecycle: viewing → editing → submitting → viewing | editing."""

import logging
from collections.abc import Callable
from typing import Literal

from careerhub.core.errors import CareerHubError

logger = logging.getLogger(__name__)

FormState = Literal["viewing", "editing", "submitting"]

# Submit actions return an error message, or None on success. They may also
# raise CareerHubError (local validation or a failed store mutation). Any other
# exception still ends the submit in ``editing`` and is re-raised.
SubmitAction = Callable[[], str | None]


class FormController:
    """Tracks one form's state and its error banner.

    A successful submit returns to ``viewing``; a failed one returns to
    ``editing`` with ``error`` set. The banner is cleared when the next
    submit starts.
    """

    def __init__(
        self,
        initial: FormState = "viewing",
        describe_error: Callable[[str], str] = str,
    ) -> None:
        self.state: FormState = initial
        self.error: str | None = None
        self._describe_error = describe_error

    @property
    def is_submitting(self) -> bool:
        return self.state == "submitting"

    def edit(self) -> None:
        if self.state == "submitting":
            msg = "Cannot edit while a submit is in flight"
            raise RuntimeError(msg)
        self.state = "editing"

    def cancel(self) -> None:
        if self.state == "submitting":
            msg = "Cannot cancel while a submit is in flight"
            raise RuntimeError(msg)
        self.state = "viewing"
        self.error = None

    def submit(self, action: SubmitAction) -> bool:
        """Run ``action``; returns True if it succeeded."""
        if self.state == "submitting":
            msg = "A submit is already in flight"
            raise RuntimeError(msg)
        self.state = "submitting"
        self.error = None
        try:
            error = action()
        except CareerHubError as e:
            error = self._describe_error(str(e))
        except Exception as e:
            logger.error("Form submit raised: %s", e)
            self.error = str(e) or type(e).__name__
            self.state = "editing"
            raise
        if error:
            logger.debug("Form submit failed: %s", error)
            self.error = error
            self.state = "editing"
            return False
        self.state = "viewing"
        return True
