from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from pathlib import Path

from catalog_lint.discovery.finder import discover_with_diagnostics
from catalog_lint.errors import ParseError
from catalog_lint.models.documents import DiscoveredFile
from catalog_lint.models.findings import RuleId, Violation
from catalog_lint.models.reports import RunReport, ValidationResult
from catalog_lint.validation.frontmatter import parse_frontmatter, read_document
from catalog_lint.validation.rules import DEFAULT_MAX_ASSET_BYTES
from catalog_lint.validation.validator import (
    parse_failure_result,
    unreadable_result,
    validate_document,
)

logger = logging.getLogger(__name__)

DEFAULT_JOBS = 8
DEFAULT_READ_TIMEOUT_S = 10.0


def run(
    root: str | Path,
    *,
    jobs: int = DEFAULT_JOBS,
    read_timeout_s: float = DEFAULT_READ_TIMEOUT_S,
    max_asset_bytes: int = DEFAULT_MAX_ASSET_BYTES,
) -> RunReport:
    files, notes = discover_with_diagnostics(root)
    results = asyncio.run(
        run_async(
            files,
            jobs=jobs,
            read_timeout_s=read_timeout_s,
            max_asset_bytes=max_asset_bytes,
        )
    )
    return RunReport(
        root=str(Path(root).expanduser().resolve()),
        checked_files=len(files),
        results=results,
        summary=summarize(results),
        notes=notes,
    )


async def run_async(
    files: list[DiscoveredFile],
    *,
    jobs: int = DEFAULT_JOBS,
    read_timeout_s: float = DEFAULT_READ_TIMEOUT_S,
    max_asset_bytes: int = DEFAULT_MAX_ASSET_BYTES,
) -> list[ValidationResult]:
    semaphore = asyncio.Semaphore(max(1, jobs))
    # A read that outlives its timeout keeps its worker thread; the run must not wait for it.
    executor = ThreadPoolExecutor(max_workers=max(1, jobs), thread_name_prefix="catalog-lint-read")

    async def _bounded_check(document: DiscoveredFile) -> ValidationResult:
        async with semaphore:
            try:
                return await _check_file(
                    document,
                    executor=executor,
                    read_timeout_s=read_timeout_s,
                    max_asset_bytes=max_asset_bytes,
                )
            except Exception as exc:  # pragma: no cover
                logger.exception("Unhandled validation failure for %s", document.path)
                return ValidationResult(
                    path=document.path,
                    kind=document.kind,
                    violations=[
                        Violation(
                            rule_id=RuleId.DISCOVERY_ERROR,
                            message=f"Internal validation failure: {exc}",
                            file_path=document.path,
                        )
                    ],
                )

    try:
        tasks = [asyncio.create_task(_bounded_check(document)) for document in files]
        results = await asyncio.gather(*tasks)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
    return sorted(results, key=lambda item: item.path)


async def _check_file(
    document: DiscoveredFile,
    *,
    executor: Executor,
    read_timeout_s: float,
    max_asset_bytes: int,
) -> ValidationResult:
    logger.info("Checking %s: %s", document.kind.value, document.path)

    loop = asyncio.get_running_loop()
    try:
        text = await asyncio.wait_for(
            loop.run_in_executor(executor, read_document, document.path_obj),
            timeout=read_timeout_s,
        )
    except TimeoutError:
        logger.warning("Timed out reading %s after %.1fs", document.path, read_timeout_s)
        return unreadable_result(document, f"Timed out after {read_timeout_s:g}s reading the file.")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Unable to read %s: %s", document.path, exc)
        return unreadable_result(document, f"Unable to read the file: {exc}")

    try:
        front_matter = parse_frontmatter(text)
    except ParseError as exc:
        logger.info("Metadata parse failure for %s: %s", document.path, exc.kind.value)
        return parse_failure_result(document, exc)

    result = validate_document(document, front_matter, max_asset_bytes=max_asset_bytes)
    logger.info(
        "Finished %s: passed=%s violations=%s warnings=%s",
        document.path,
        result.passed,
        len(result.violations),
        len(result.warnings),
    )
    return result


def summarize(results: list[ValidationResult]) -> dict[str, int]:
    passed = sum(1 for item in results if item.passed)
    return {
        "passed": passed,
        "failed": len(results) - passed,
        "violations": sum(len(item.violations) for item in results),
        "warnings": sum(len(item.warnings) for item in results),
    }


def has_failures(report: RunReport, *, strict: bool = False) -> bool:
    for item in report.results:
        if not item.passed:
            return True
        if strict and item.warnings:
            return True
    return False
