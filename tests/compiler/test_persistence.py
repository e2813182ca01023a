import asyncio
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from widgetforge.compiler.persistence import CancelledByOperator, Failed, PersistenceCoordinator, Saved
from widgetforge.testing import CancellingDestinationPicker, FixedDestinationPicker, GatedDestinationPicker

ARTIFACT = "export const command = \"whoami\"\n"


def _unwritable_dir(root: Path) -> Path:
    # A regular file where a directory is expected makes mkdir fail, even as root.
    blocker = root / "blocker"
    blocker.write_text("x", encoding="utf-8")
    return blocker / "widgets"


class TestPersistenceCoordinator(unittest.IsolatedAsyncioTestCase):
    async def test_direct_write_creates_directories(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "Application Support" / "Übersicht" / "widgets"
            picker = FixedDestinationPicker(Path(td) / "unused.jsx")
            coord = PersistenceCoordinator(target, picker)

            outcome = await coord.persist(ARTIFACT)

            self.assertEqual(outcome, Saved(path=target / "index.jsx"))
            self.assertEqual((target / "index.jsx").read_text(encoding="utf-8"), ARTIFACT)
            self.assertEqual(picker.calls, [])

    async def test_direct_write_overwrites_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td)
            (target / "index.jsx").write_text("old", encoding="utf-8")
            coord = PersistenceCoordinator(target, CancellingDestinationPicker())

            outcome = await coord.persist(ARTIFACT)

            self.assertIsInstance(outcome, Saved)
            self.assertEqual((target / "index.jsx").read_text(encoding="utf-8"), ARTIFACT)
            self.assertEqual(sorted(p.name for p in target.iterdir()), ["index.jsx"])

    async def test_default_name_override(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            coord = PersistenceCoordinator(Path(td), CancellingDestinationPicker())
            outcome = await coord.persist(ARTIFACT, default_name="clock.jsx")
            self.assertEqual(outcome, Saved(path=Path(td) / "clock.jsx"))

    async def test_fallback_to_picker_on_direct_write_failure(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            chosen = root / "chosen.jsx"
            picker = FixedDestinationPicker(chosen)
            target = _unwritable_dir(root)
            coord = PersistenceCoordinator(target, picker)

            outcome = await coord.persist(ARTIFACT)

            self.assertEqual(outcome, Saved(path=chosen))
            self.assertEqual(chosen.read_text(encoding="utf-8"), ARTIFACT)
            self.assertEqual(picker.calls, [("index.jsx", "jsx", target)])

    async def test_permission_denied_then_operator_cancels(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            picker = CancellingDestinationPicker()
            coord = PersistenceCoordinator(Path(td), picker)
            with patch("widgetforge.compiler.persistence._write_direct", side_effect=PermissionError(13, "Permission denied")):
                outcome = await coord.persist(ARTIFACT)

            self.assertEqual(outcome, CancelledByOperator())
            self.assertEqual(len(picker.calls), 1)
            self.assertEqual(list(Path(td).iterdir()), [])

    async def test_fallback_write_failure_is_failed(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            picker = FixedDestinationPicker(root / "missing-dir" / "index.jsx")
            coord = PersistenceCoordinator(_unwritable_dir(root), picker)

            outcome = await coord.persist(ARTIFACT)

            self.assertIsInstance(outcome, Failed)
            self.assertEqual(outcome.code, "persistence.fallback_write_failed")
            self.assertTrue(outcome.reason.startswith("Error writing file:"))
            self.assertFalse((root / "missing-dir").exists())

    async def test_non_os_errors_are_not_treated_as_write_failures(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            picker = CancellingDestinationPicker()
            coord = PersistenceCoordinator(Path(td), picker)
            with patch("widgetforge.compiler.persistence._write_direct", side_effect=RuntimeError("boom")):
                with self.assertRaises(RuntimeError):
                    await coord.persist(ARTIFACT)
            self.assertEqual(picker.calls, [])

    async def test_cancelling_pending_prompt_means_operator_declined(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            picker = GatedDestinationPicker(Path(td) / "never.jsx")
            coord = PersistenceCoordinator(_unwritable_dir(Path(td)), picker)

            task = asyncio.create_task(coord.persist(ARTIFACT))
            await asyncio.wait_for(picker.prompted.wait(), timeout=5)
            task.cancel()
            outcome = await task

            self.assertEqual(outcome, CancelledByOperator())
            self.assertFalse((Path(td) / "never.jsx").exists())

    def test_preview_writes_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "widgets"
            coord = PersistenceCoordinator(target, CancellingDestinationPicker())
            out = coord.preview(ARTIFACT)
            self.assertTrue(out["dry_run"])
            self.assertEqual(out["path"], str((target / "index.jsx").absolute()))
            self.assertFalse(target.exists())


if __name__ == "__main__":
    unittest.main()
