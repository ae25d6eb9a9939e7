"""Main CLI entry point for Media Resolver."""

import hydra
from omegaconf import DictConfig
from rich.console import Console

from .api import run_server
from .config import Settings
from .utils.log import setup_logging

console = Console()


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    """Start the API server with the composed config."""
    settings = Settings.from_config(cfg)
    setup_logging(settings.logging.level)
    
    console.print(f"[bold blue]{settings.app.name}[/bold blue] v{settings.app.version}")
    console.print(f"[cyan]Environment:[/cyan] {settings.app.environment}")
    console.print(f"[cyan]Allowed origins:[/cyan] {', '.join(settings.app.allowed_origins)}")
    console.print(f"[cyan]Server:[/cyan] http://{settings.server.host}:{settings.server.port}")
    console.print()
    
    run_server(settings)


if __name__ == "__main__":
    main()
