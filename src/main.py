"""
Main entry point for the DANFE HTML converter.

Usage:
    danfe-html nota.xml [outra.xml | pasta/ | lote.zip ...] [-o output] [--excel]
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional
from loguru import logger

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from models import Settings, EnvironmentSettings
from core import ProcessingOrchestrator

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "settings.toml"


def setup_logging(log_level: str = "INFO", logs_dir: Optional[Path] = Path("logs")):
    """Configure logging"""
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
    )
    if logs_dir:
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(logs_dir / "app_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="7 days",
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="danfe-html",
        description="Gera o DANFE em HTML a partir do XML da NF-e"
    )
    parser.add_argument("inputs", nargs="+", type=Path,
                        help="Arquivos XML, pastas ou arquivos ZIP")
    parser.add_argument("-o", "--output-dir", type=Path, default=None,
                        help="Pasta de saída (padrão: OUTPUT_DIR ou ./output)")
    parser.add_argument("-c", "--config", type=Path, default=DEFAULT_CONFIG,
                        help="Arquivo de configuração TOML")
    parser.add_argument("--timezone", default=None,
                        help="Fuso horário IANA para a hora do protocolo")
    parser.add_argument("--excel", action="store_true",
                        help="Gera planilha resumo do lote")
    parser.add_argument("--no-log-file", action="store_true",
                        help="Não grava log em arquivo")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run a batch conversion, returning the process exit code"""
    args = build_parser().parse_args(argv)

    settings = Settings.load_from_toml(args.config)
    env_settings = EnvironmentSettings()

    setup_logging(env_settings.log_level, None if args.no_log_file else Path("logs"))
    logger.info(f"Starting {settings.app.name} v{settings.app.version}")

    output_dir = args.output_dir or Path(env_settings.output_dir)
    timezone = args.timezone or env_settings.resolve_timezone(settings)

    orchestrator = ProcessingOrchestrator(
        output_dir=output_dir,
        max_workers=settings.processing.max_concurrent_files,
        tz=timezone or None,
        template_path=settings.render.template_path,
    )
    batch = orchestrator.process_files(args.inputs)

    if (args.excel or settings.export.excel_report) and batch.results:
        from utils.excel_reporter import ExcelReporter
        reporter = ExcelReporter(
            output_dir=output_dir,
            auto_fit_columns=settings.export.auto_fit_columns,
            freeze_header_row=settings.export.freeze_header_row,
        )
        reporter.generate_report(batch.results)

    for path in batch.output_paths:
        logger.info(f"DANFE written: {path}")
    for error in batch.errors:
        logger.error(f"{error.filename}: {error.error_message}")

    return 0 if batch.total_files and not batch.failed else 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
