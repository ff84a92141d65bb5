# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

import targets


@pytest.fixture(autouse=True)
def _reset_static_state():
	"""Static members are shared across tests; put them back after each one."""
	yield
	targets.FieldTarget.set_static_text(None)
	targets.FieldTarget._dummy_count = 0
	targets.PropertyTarget.set_static_text(None)
