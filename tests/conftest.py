from datetime import datetime

import pytest

from lot_matcher.workflow.capture import CaptureWorkflow


FIXED_NOW = datetime(2024, 5, 2, 9, 14, 3)


@pytest.fixture
def workflow():
    return CaptureWorkflow(clock=lambda: FIXED_NOW)
