"""Cyclopts CLI entrypoint for building redocus sites.

The ``redocus`` console script resolves the site configuration (by default
``redocus.config.py`` in the working directory), runs the build orchestrator
and prints each written file. A missing or invalid configuration is reported
and the process exits with status 1 before any output directory is created.

Examples
--------
Build the site described by the default configuration file:

>>> from redocus.cli import main
>>> main()  # doctest: +SKIP

Build with an explicit configuration file:

>>> from redocus.cli import app
>>> app(["build", "--config", "site/redocus.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_FILE, LOGGER_NAME
from .builder import SiteBuilder
from .config import ConfigNotFoundError, SiteConfigError, load_site_config

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILE)
LOG_FORMAT = f"[{LOGGER_NAME}] %(message)s"

app = App(name="redocus", config=cyclopts.config.Env("REDOCUS_", command=False))  # type: ignore[unknown-argument]
logger = logging.getLogger(LOGGER_NAME)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )


@app.command(help="Render every page of the site into static HTML files.")
def build(
    *,
    config: typ.Annotated[
        Path,
        Parameter(
            name=["--config", "-c"],
            help="Path to the site configuration",
            env_var="REDOCUS_CONFIG",
        ),
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[
        bool, Parameter(help="Log hook calls and build stage transitions")
    ] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Python module or YAML file describing the site; defaults to
        ``redocus.config.py`` (overridable via ``REDOCUS_CONFIG``).
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes HTML files and prints their paths.

    Raises
    ------
    SystemExit
        With status 1 when the configuration file is missing or invalid, or
        when strict mode finds no input directory.
    """
    _configure_logging(verbose=verbose)
    try:
        site_config = load_site_config(config)
        written = SiteBuilder(site_config).run()
    except (ConfigNotFoundError, SiteConfigError) as exc:
        logger.error("ERROR: %s", exc)  # noqa: TRY400 - the message is the report
        raise SystemExit(1) from exc
    for path in written:
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``redocus`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
