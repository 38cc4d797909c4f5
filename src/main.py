import contextlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

import typer

from app_config import (
    AppConfig,
    AppConfigurationError,
    load_app_config,
)
from app_config_schema import (
    DEFAULT_CONFIG_DIR,
    INTERFACE_ANSI,
    INTERFACE_CURSES,
    INTERFACE_WEB,
)
from interface import (
    AnsiPresentation,
    CommandQueueInput,
    InterfaceError,
    KeyBindings,
    WebPresentation,
    pomocom_title,
    set_terminal_title,
)
from pomodoro import (
    DEFAULT_POMO_FILE,
    InputSource,
    PomodoroError,
    Presentation,
    Section,
    SectionController,
    SectionSequencer,
    SectionTable,
    ShellCommandRunner,
    load_pomo_file,
)
from runtime import RuntimeEngine
from server import ServerConfigurationError, UIServer, UIServerConfig

GOODBYE_MESSAGE = "Hey thanks for using pomocom."
LOG_FILE_NAME = "pomocom.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

app = typer.Typer(help="Terminal pomodoro timer with per-section commands.")


def setup_logging(
    level: int = logging.INFO,
    *,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure logging for the application.

    Terminal interfaces pass ``log_file`` so log lines stay off the screen.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        filename=str(log_file) if log_file is not None else None,
        force=True,
    )
    return logging.getLogger("pomocom")


def log_file_path(app_config: AppConfig) -> Path:
    if app_config.source_file:
        return Path(app_config.source_file).parent / LOG_FILE_NAME
    return DEFAULT_CONFIG_DIR.expanduser() / LOG_FILE_NAME


def start_section_for(start_break: bool, start_long_break: bool) -> Section:
    if start_break and start_long_break:
        raise typer.BadParameter("--break and --long-break cannot be combined")
    if start_long_break:
        return Section.LONG_BREAK
    if start_break:
        return Section.BREAK
    return Section.WORK


def load_sections(
    app_config: AppConfig,
    pomo_file: str,
    *,
    quick: Optional[Tuple[int, int, int]] = None,
) -> SectionTable:
    sections = load_pomo_file(
        pomo_file,
        sections_dir=app_config.paths.sections,
        bin_dir=app_config.paths.bin,
    )
    if quick is not None:
        sections = sections.with_durations(quick)
    sections.validate()
    return sections


@dataclass(frozen=True)
class InterfaceSession:
    presentation: Presentation
    input_source: InputSource


@contextlib.contextmanager
def open_interface(
    app_config: AppConfig,
    *,
    file_name: str,
    logger: logging.Logger,
) -> Iterator[InterfaceSession]:
    """Open the configured interface and close it again on exit."""
    timer = app_config.timer
    bindings = KeyBindings(app_config.keys)

    if timer.interface == INTERFACE_WEB:
        with _open_web_interface(app_config, file_name=file_name, logger=logger) as session:
            yield session
        return

    if timer.set_terminal_title:
        set_terminal_title(pomocom_title(file_name))

    if timer.interface == INTERFACE_CURSES:
        from interface.curses_ui import CursesInterface

        with CursesInterface(
            file_name=file_name,
            bindings=bindings,
            colors=app_config.curses,
            show_controls=timer.show_controls,
        ) as screen:
            yield InterfaceSession(presentation=screen, input_source=screen)
        return

    if timer.interface == INTERFACE_ANSI:
        from interface.terminal_input import TerminalInput

        with TerminalInput(bindings) as terminal_input:
            yield InterfaceSession(
                presentation=AnsiPresentation(
                    file_name=file_name,
                    bindings=bindings,
                    show_controls=timer.show_controls,
                ),
                input_source=terminal_input,
            )
        return

    raise InterfaceError(f"Unsupported interface: {timer.interface}")


@contextlib.contextmanager
def _open_web_interface(
    app_config: AppConfig,
    *,
    file_name: str,
    logger: logging.Logger,
) -> Iterator[InterfaceSession]:
    ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    command_input = CommandQueueInput()
    ui_server = UIServer(
        config=ui_server_config,
        on_command=command_input.submit,
        logger=logging.getLogger("ui_server"),
    )
    logger.info("Starting UI server...")
    ui_server.start(timeout_seconds=5.0)
    presentation = WebPresentation(ui_server, file_name=file_name)
    typer.echo(f"Open http://{ui_server.host}:{ui_server.port}/ to control the timer.")
    try:
        yield InterfaceSession(presentation=presentation, input_source=command_input)
    finally:
        presentation.goodbye()
        ui_server.stop()


def run_timer(
    *,
    pomo_file: str = DEFAULT_POMO_FILE,
    start_section: Section = Section.WORK,
    quick: Optional[Tuple[int, int, int]] = None,
    overrides: Tuple[str, ...] = (),
    config_path: Optional[str] = None,
    verbose: bool = False,
    interface_factory: Callable[..., contextlib.AbstractContextManager] = open_interface,
) -> int:
    """Run sections until the user quits and return the process exit code."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = setup_logging(level=level)

    try:
        app_config = load_app_config(config_path, overrides=overrides)
        if app_config.source_file:
            logger.info("Loaded runtime config: %s", app_config.source_file)
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    try:
        sections = load_sections(app_config, pomo_file, quick=quick)
        sequencer = SectionSequencer(
            breaks_until_long_reset=app_config.timer.breaks_until_long_reset,
            start_section=start_section,
        )
    except PomodoroError as error:
        logger.error(f"Section configuration error: {error}")
        return 1

    if app_config.timer.interface in (INTERFACE_ANSI, INTERFACE_CURSES):
        log_file = log_file_path(app_config)
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            logger = setup_logging(level=level, log_file=log_file)
        except OSError as error:
            logger.warning("Cannot write log file %s: %s", log_file, error)

    logger.info(
        "Starting pomo file %r with %s (%s interface)",
        pomo_file,
        start_section.value,
        app_config.timer.interface,
    )

    try:
        with interface_factory(app_config, file_name=pomo_file, logger=logger) as session:
            controller = SectionController(
                sections=sections,
                sequencer=sequencer,
                input_source=session.input_source,
                presentation=session.presentation,
                command_runner=ShellCommandRunner(),
                update_interval=app_config.timer.update_interval,
                pause_before_section_start=app_config.timer.pause_before_section_start,
            )
            exit_code = RuntimeEngine(controller).run()
    except ServerConfigurationError as error:
        logger.error(f"UI server configuration error: {error}")
        return 1
    except (InterfaceError, RuntimeError) as error:
        logger.error(f"Interface startup failed: {error}")
        return 1

    if exit_code == 0:
        typer.echo(GOODBYE_MESSAGE)
    return exit_code


@app.command()
def main(
    pomo_file: str = typer.Argument(
        DEFAULT_POMO_FILE,
        help="Pomo file name in the sections directory, or a ./relative path.",
    ),
    start_break: bool = typer.Option(
        False, "--break", "-b", help="Start with a break."
    ),
    start_long_break: bool = typer.Option(
        False, "--long-break", "-B", help="Start with a long break."
    ),
    quick: Tuple[int, int, int] = typer.Option(
        (None, None, None),
        "--quick",
        "-q",
        help="Override the work, break and long break durations in minutes.",
    ),
    settings: Optional[List[str]] = typer.Option(
        None,
        "--set",
        help="Override a setting, e.g. --set timer.update_interval=2.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to the TOML settings file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
) -> None:
    """Run the pomodoro timer."""
    exit_code = run_timer(
        pomo_file=pomo_file,
        start_section=start_section_for(start_break, start_long_break),
        quick=tuple(quick) if quick and None not in quick else None,
        overrides=tuple(settings or ()),
        config_path=config_path,
        verbose=verbose,
    )
    raise typer.Exit(code=exit_code)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
