import argparse
import logging
import os
import sys
from dotenv import load_dotenv

from ..config import DigestConfig
from ..domain.errors import DigestPipelineError
from ..infrastructure.logging_config import configure_logging, LayerLoggerAdapter
from ..infrastructure.archive_catalog import LocalArchiveCatalog
from ..infrastructure.catalog_exporter import ParquetCatalogExporter
from ..infrastructure.digest_cache import SidecarDigestCache
from ..infrastructure.gzip_digester import GzipArchiveDigester
from ..infrastructure.known_users_store import TextKnownUsersStore
from ..infrastructure.summary_writer import JsonSummaryWriter
from ..application.use_cases import DigestService
from .controllers import DigestController


def build_service(config: DigestConfig) -> DigestService:
    infra_logger = LayerLoggerAdapter(logging.getLogger("Infrastructure"), {"layer": "Infrastructure"})
    app_logger = LayerLoggerAdapter(logging.getLogger("DigestService"), {"layer": "Application"})

    exporter = ParquetCatalogExporter(config.catalog_directory) if config.catalog_directory else None

    return DigestService(
        archive_catalog=LocalArchiveCatalog(config),
        digest_cache=SidecarDigestCache(config, logger=infra_logger),
        digester=GzipArchiveDigester(buffer_size=config.buffer_size, logger=infra_logger),
        users_store=TextKnownUsersStore(config.users_file, logger=infra_logger),
        summary_writer=JsonSummaryWriter(config.summary_file),
        catalog_exporter=exporter,
        logger=app_logger,
    )


def main(argv=None):
    if os.environ.get("TESTING_MODE") != "1":
        load_dotenv()
    configure_logging()

    cli_logger = LayerLoggerAdapter(logging.getLogger("CLI"), {"layer": "Presentation"})

    parser = argparse.ArgumentParser(
        prog="event-digest",
        description="Digest degli archivi orari di eventi e scoperta incrementale degli utenti.",
    )
    parser.add_argument("--events-path", default=None, help="Directory degli archivi *.json.gz (default: env GHC_EVENTS_PATH)")
    parser.add_argument("--catalog-path", default=None, help="Directory dell'export Parquet (default: env GHC_CATALOG_PATH)")
    parser.add_argument("--info", action="store_true", help="Mostra statistiche senza elaborare")

    args = parser.parse_args(argv)

    try:
        config = DigestConfig.from_env(events_directory=args.events_path, catalog_directory=args.catalog_path)
        controller = DigestController(build_service(config), cli_logger)

        if args.info:
            controller.show_info()
        else:
            controller.run_digest()

    except DigestPipelineError as e:
        cli_logger.critical(f"Pipeline interrotta: {e}", exc_info=True)
        sys.exit(1)
    except Exception as e:
        cli_logger.critical(f"Errore fatale imprevisto: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
