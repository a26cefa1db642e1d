#!/usr/bin/env python3
"""Validate local hostel booking environment readiness."""

from __future__ import annotations

import importlib
import shutil
import sys
import tempfile
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.repository.data_repository import DataRepository
from backend.services.booking_service import BookingService
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    temp_dir = tempfile.mkdtemp(prefix="hostel-env-")

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_names = ["fastapi", "uvicorn", "pydantic", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_names:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    try:
        validation_settings = replace(
            get_settings(),
            data_file_path=Path(temp_dir) / "data.json",
        )
        repository = DataRepository(validation_settings)

        # CHECK 3: Data file creation
        try:
            repository.initialize_storage()
            if not repository.data_path.exists():
                raise RuntimeError("data file was not created")
            ok, line = _print_result("Data file initialization", True)
        except Exception as exc:
            ok, line = _print_result("Data file initialization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 4: Demo rooms seeded and stable on save
        try:
            seeded = repository.seed_demo_rooms_if_empty()
            before = repository.data_path.read_text(encoding="utf-8")
            repository.save(repository.load())
            if repository.data_path.read_text(encoding="utf-8") != before:
                raise RuntimeError("save(load()) changed the data file")
            ok, line = _print_result("Demo room seeding", True, f": {seeded} rooms")
        except Exception as exc:
            ok, line = _print_result("Demo room seeding", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 5: Book, queue and cancel round trip
        try:
            service = BookingService(repository=repository, settings=validation_settings)
            first = service.book_room(1, "Validator A")
            queued = service.book_room(1, "Validator B")
            if first.booking is None or queued.queue_position != 1:
                raise RuntimeError("unexpected booking/queue outcome")
            cancelled = service.cancel_booking(first.booking.booking_id)
            if cancelled.assigned is None or cancelled.assigned.user_name != "Validator B":
                raise RuntimeError("queued user was not promoted")
            ok, line = _print_result("Booking workflow", True)
        except Exception as exc:
            ok, line = _print_result("Booking workflow", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print(SEPARATOR_LINE)
    print(" Hostel Booking Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
