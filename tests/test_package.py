"""
Tests for the public package surface.
"""

import nanostore_publisher


class TestPublicApi:
    """Tests for package exports."""

    def test_all_exports_resolve(self) -> None:
        """Test every name in __all__ is importable."""
        for name in nanostore_publisher.__all__:
            assert hasattr(nanostore_publisher, name), name

    def test_version(self) -> None:
        """Test version metadata."""
        assert nanostore_publisher.__version__ == "0.1.0"
        assert nanostore_publisher.__version_info__ == (0, 1, 0)

    def test_operations_exported(self) -> None:
        """Test the publishing operations are exported."""
        for name in ("invoice", "derive_payment_info", "pay", "submit_payment", "upload", "publish_file"):
            assert callable(getattr(nanostore_publisher, name))
