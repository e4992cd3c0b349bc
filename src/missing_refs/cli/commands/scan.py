"""Scan commands - find missing references in scenes or assets."""

import logging
import sys
from typing import List, Optional

from ...core.data_classes import ScannerConfig, ScanResult
from ...core.errors import MissingReferencesError
from ...finder import MissingReferencesFinder
from ...hosts.file_host import ProjectHost
from ...hosts.project_scanner import ProjectScannerConfig
from ...reporting.report_formatter import ConsoleDisplay
from ..config import Config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 2


def create_host(config: Config, scene: Optional[str] = None) -> ProjectHost:
    """Open the configured project directory as a host environment."""
    config.ensure_project_dir()
    return ProjectHost(
        config.project_dir,
        build_settings_path=config.build_settings_path,
        scanner_config=ProjectScannerConfig(
            skip_hidden_files=config.skip_hidden_files,
            supported_extensions=config.document_extensions,
        ),
        default_scene=scene or config.default_scene,
    )


def create_finder(config: Config, display=None, scene: Optional[str] = None) -> MissingReferencesFinder:
    return MissingReferencesFinder(create_host(config, scene), display, ScannerConfig.from_config(config))


def scan_command(
    config: Config,
    target: str,
    scene: Optional[str] = None,
    prefix: Optional[str] = None,
    output_format: Optional[str] = None,
    fail_on_findings: bool = False,
) -> int:
    """
    Run one scan and print its report.

    Args:
        config: Loaded configuration
        target: "scene", "all-scenes" or "assets"
        scene: Scene to open before a "scene" scan (default: configured scene)
        prefix: Asset path prefix for an "assets" scan
        output_format: text, json or markdown (default: configured format)
        fail_on_findings: Return EXIT_FINDINGS when anything was found

    Returns:
        Process exit code
    """
    try:
        display = ConsoleDisplay(output_format=output_format or config.output_format)
        finder = create_finder(config, display, scene)
        logger.info(f"📁 Project: {config.project_dir}")

        if target == "scene":
            results: List[ScanResult] = finder.scan_current_context()
        elif target == "all-scenes":
            results = finder.scan_all_contexts()
        elif target == "assets":
            results = finder.scan_asset_collection(prefix or config.asset_path_prefix)
        else:
            raise ValueError(f"Unknown scan target: {target}")

    except (MissingReferencesError, OSError, ValueError) as e:
        logger.error(f"❌ Scan failed: {e}")
        return EXIT_ERROR

    logger.info(f"✅ Scan finished with {len(results)} findings")
    if fail_on_findings and results:
        return EXIT_FINDINGS
    return EXIT_OK


def run_scan_command(config: Config, **kwargs) -> None:
    """Run scan_command and exit with its code when it is non-zero."""
    code = scan_command(config, **kwargs)
    if code != EXIT_OK:
        sys.exit(code)
