"""CLI entry point for the fridge telemetry simulator.

Usage::

    fridge-telemetry run --preset fridge --duration 30
    fridge-telemetry run --preset dashboard --seed 7 --format json
    fridge-telemetry run --config simulator.yaml
    fridge-telemetry list-presets
    fridge-telemetry init-config --output simulator.yaml
    fridge-telemetry show-settings
    fridge-telemetry serve --port 3001
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import textwrap

# ---------------------------------------------------------------------------
# Sample YAML config template for init-config
# ---------------------------------------------------------------------------
_SAMPLE_CONFIG = """\
# Fridge telemetry simulator configuration

simulator:
  preset: fridge                      # fridge or dashboard (run 'fridge-telemetry list-presets')
  tick_interval_ms: 3000              # milliseconds between readings
  temperature_range: [2, 8]           # degrees Celsius
  initial_temperature_c: 4.2
  # temperature_step: 0.5             # full width of the per-tick perturbation
  # humidity_range: [40, 60]
  # power_range: [160, 210]
  # connectivity: alternate           # random or alternate
  # seed: 42                          # reproducible run
  # duration_s: 60                    # optional: auto-stop after N seconds
  # log_level: INFO                   # DEBUG, INFO, WARNING, ERROR

sinks:
  - type: console
    fmt: text                         # text or json
"""

_LOG_FORMAT = "%(asctime)s %(name)-30s %(levelname)-7s %(message)s"


# ======================================================================
# Main entry point
# ======================================================================


def main(argv: list[str] | None = None) -> None:
    epilog = textwrap.dedent("""\
        examples:
          fridge-telemetry run --preset fridge --duration 30
          fridge-telemetry run --preset dashboard --seed 7 --format json
          fridge-telemetry run --config simulator.yaml
          fridge-telemetry list-presets
          fridge-telemetry init-config --output simulator.yaml
          fridge-telemetry show-settings
          fridge-telemetry serve --port 3001
    """)

    parser = argparse.ArgumentParser(
        prog="fridge-telemetry",
        description="Simulate fridge telemetry readings on a fixed cadence.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", title="commands")

    # -- run ---------------------------------------------------------------
    run_parser = subparsers.add_parser(
        "run",
        help="Run the simulator in real time and print readings.",
    )
    run_parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML config file. When set, --preset/--interval/--format are ignored.",
    )
    run_parser.add_argument(
        "--preset",
        "-p",
        type=str,
        default="fridge",
        help="Named preset (default: fridge).",
    )
    run_parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Override the tick interval in milliseconds.",
    )
    run_parser.add_argument(
        "--duration",
        "-d",
        type=float,
        default=None,
        help="Run duration in seconds (default: indefinite, Ctrl-C to stop).",
    )
    run_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random source (default: unseeded).",
    )
    run_parser.add_argument(
        "--format",
        type=str,
        default="text",
        choices=["text", "json"],
        help="Console output format (default: text).",
    )
    run_parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: FRIDGE_LOG_LEVEL or INFO).",
    )

    # -- list-presets ------------------------------------------------------
    subparsers.add_parser(
        "list-presets",
        help="List the built-in presets.",
    )

    # -- init-config -------------------------------------------------------
    init_parser = subparsers.add_parser(
        "init-config",
        help="Generate a sample YAML configuration file.",
    )
    init_parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write config to this file instead of stdout.",
    )

    # -- show-settings -----------------------------------------------------
    subparsers.add_parser(
        "show-settings",
        help="Show tenant settings read from the environment.",
    )

    # -- serve -------------------------------------------------------------
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the tenant status endpoint.",
    )
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address (default: 127.0.0.1).")
    serve_parser.add_argument("--port", type=int, default=3001, help="Port (default: 3001).")

    # A leading flag (e.g. `fridge-telemetry --preset dashboard`) means "run".
    _known_commands = {"run", "list-presets", "init-config", "show-settings", "serve"}
    raw_args = argv if argv is not None else sys.argv[1:]
    if raw_args and raw_args[0] not in _known_commands and raw_args[0] not in ("-h", "--help"):
        raw_args = ["run", *list(raw_args)]

    args = parser.parse_args(raw_args)

    if args.command is None:
        parser.print_help()
        return

    # -- Dispatch ----------------------------------------------------------
    if args.command == "run":
        _cmd_run(args)
    elif args.command == "list-presets":
        _cmd_list_presets()
    elif args.command == "init-config":
        _cmd_init_config(args.output)
    elif args.command == "show-settings":
        _cmd_show_settings()
    elif args.command == "serve":
        _cmd_serve(args.host, args.port)
    else:
        parser.print_help()


# ======================================================================
# Command implementations
# ======================================================================


def _cmd_run(args: argparse.Namespace) -> None:
    """Execute the simulator."""
    from fridge_telemetry.config import get_preset, load_yaml_config
    from fridge_telemetry.settings import get_settings
    from fridge_telemetry.simulator import TelemetrySimulator
    from fridge_telemetry.sinks.console import ConsoleSink
    from fridge_telemetry.sinks.factory import create_sink

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, args.log_level or settings.log_level, logging.INFO),
        format=_LOG_FORMAT,
        datefmt="%H:%M:%S",
    )

    try:
        if args.config:
            file_cfg = load_yaml_config(args.config)
            if args.log_level is None:
                logging.getLogger().setLevel(getattr(logging, file_cfg.log_level, logging.INFO))
            config = file_cfg.simulator
            seed = args.seed if args.seed is not None else file_cfg.seed
            duration = args.duration if args.duration is not None else file_cfg.duration_s
            sinks = [create_sink(d) for d in file_cfg.sink_configs]
        else:
            config = get_preset(args.preset)
            if args.interval is not None:
                config = config.model_copy(update={"tick_interval_ms": args.interval})
            config.validate_ranges()
            seed = args.seed
            duration = args.duration
            sinks = []
    except (ValueError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    if not sinks:
        sinks = [ConsoleSink(fmt=args.format, label=settings.tenant_name)]

    sim = TelemetrySimulator(rng=random.Random(seed))
    try:
        sim.run(config, duration_s=duration, consumers=sinks)
    finally:
        for sink in sinks:
            sink.close()


# -- list-presets -----------------------------------------------------------


def _cmd_list_presets() -> None:
    from fridge_telemetry.config import PRESETS

    print(f"\n{'Preset':<12} {'Interval':>9} {'Temp °C':>14} {'Humidity %':>12} {'Power W':>12} {'Link':<10}")
    print("-" * 74)
    for name, cfg in PRESETS.items():
        t, h, p = cfg.temperature_range, cfg.humidity_range, cfg.power_range
        print(
            f"{name:<12} {cfg.tick_interval_ms:>6d} ms "
            f"{t.min_value:>6.1f}..{t.max_value:<6.1f} "
            f"{h.min_value:>5.0f}..{h.max_value:<5.0f} "
            f"{p.min_value:>5.0f}..{p.max_value:<5.0f} "
            f"{cfg.connectivity.value:<10}"
        )
    print()


# -- init-config ------------------------------------------------------------


def _cmd_init_config(output_path: str | None) -> None:
    if output_path:
        from pathlib import Path

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_text(_SAMPLE_CONFIG)
        print(f"Sample config written to {output_path}")
    else:
        print(_SAMPLE_CONFIG)


# -- show-settings ----------------------------------------------------------


def _cmd_show_settings() -> None:
    from fridge_telemetry.settings import get_settings

    settings = get_settings()
    print()
    print(f"{'Tenant:':<10} {settings.tenant}")
    print(f"{'Name:':<10} {settings.tenant_name}")
    print(f"{'Backend:':<10} {settings.backend_url}")
    print(f"{'MQTT:':<10} {settings.mqtt_url}")
    print(f"{'Log level:':<10} {settings.log_level}")
    print()


# -- serve ------------------------------------------------------------------


def _cmd_serve(host: str, port: int) -> None:
    import uvicorn

    from fridge_telemetry.api import create_app
    from fridge_telemetry.settings import get_settings

    uvicorn.run(create_app(), host=host, port=port, log_level=get_settings().log_level.lower())


# ======================================================================
if __name__ == "__main__":
    main()
