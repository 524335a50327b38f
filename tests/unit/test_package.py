"""Unit tests for the package exports."""

from __future__ import annotations

import lakekeeper
from lakekeeper.client import Client
from lakekeeper.errors import LakekeeperError


class TestPackageExports:
    """Tests for the names re-exported by the package."""

    def test_every_export_resolves(self) -> None:
        """Test each name in __all__ is an attribute of the package."""
        missing = [name for name in lakekeeper.__all__ if not hasattr(lakekeeper, name)]
        assert missing == []

    def test_exports_are_module_objects(self) -> None:
        """Test re-exported names are the objects of their defining modules."""
        assert lakekeeper.Client is Client
        assert lakekeeper.LakekeeperError is LakekeeperError
