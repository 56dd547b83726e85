# cli.py
import logging

import click
import uvicorn

from upload_api.config.settings import Settings, get_settings
from upload_api.logging_config import configure_logging
from upload_api.main import create_app

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for running and inspecting the Upload API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  Host: {settings.host}")
    print(f"  Port: {settings.port}")
    print(f"  Storage Directory: {settings.storage_dir}")
    print(f"  Max Upload Size: {settings.max_upload_size} bytes")
    print(f"  Multipart Overhead: {settings.multipart_overhead_bytes} bytes")
    print(f"  Token Bytes: {settings.token_bytes}")
    print(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--host", default=None, help="Interface to listen on")
@click.option("--port", type=int, default=None, help="Port to listen on")
@click.option("--storage-dir", default=None, help="Directory to store uploads in")
def serve(host, port, storage_dir):
    """Run the Upload API server"""
    overrides = {
        key: value
        for key, value in {"host": host, "port": port, "storage_dir": storage_dir}.items()
        if value is not None
    }
    settings = Settings(**overrides)
    configure_logging(settings.log_level)

    app = create_app(settings)
    logger.info(
        f"Server started on {settings.host}:{settings.port}, use /upload for uploading files "
        f"and /files/{{fileName}} for downloading files."
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    cli()
