#!/usr/bin/env python
"""Price European/American options (and an optional chooser) on a binomial lattice."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from binomial_lattice.apps._cli import (
    add_dry_run_arg,
    add_print_config_arg,
    collect_logging_overrides,
    ensure_list,
    log_dry_run,
    print_config,
)
from binomial_lattice.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    resolve_path,
    setup_logging_from_config,
)
from binomial_lattice.lattice import TriangularLattice, build_lattice_model
from binomial_lattice.options import (
    OptionStyle,
    chooser_lattice,
    coerce_option_styles,
    price_option,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "model": {
        "rate": 0.02,
        "carry": 0.01,
        "periods": 15,
        "time": 0.25,
        "sigma": 0.3,
    },
    "option": {
        "spot": 100.0,
        "strike": 100.0,
        "horizon": None,
        "styles": ["ce", "pe", "ca", "pa"],
    },
    "chooser": {
        "step": None,
    },
    "output": {
        "dir": None,
    },
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price options on a binomial lattice built from Black-Scholes inputs."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    model = parser.add_argument_group("model")
    model.add_argument("--rate", type=float, default=None)
    model.add_argument(
        "--carry",
        type=float,
        default=None,
        help="Continuous dividend yield / carry rate of the underlying.",
    )
    model.add_argument("--periods", type=int, default=None)
    model.add_argument("--time", type=float, default=None, help="Years to maturity.")
    model.add_argument("--sigma", type=float, default=None)

    option = parser.add_argument_group("option")
    option.add_argument("--spot", type=float, default=None)
    option.add_argument("--strike", type=float, default=None)
    option.add_argument(
        "--horizon",
        type=int,
        default=None,
        help="Option periods (<= model periods). Defaults to the model periods.",
    )
    option.add_argument(
        "--styles",
        nargs="+",
        default=None,
        help="Styles to price: ce, pe, ca, pa.",
    )

    parser.add_argument(
        "--chooser-step",
        type=int,
        default=None,
        help="Also price a chooser deciding at this step.",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Write each value lattice as CSV into this directory.",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    model = {
        key: value
        for key, value in (
            ("rate", args.rate),
            ("carry", args.carry),
            ("periods", args.periods),
            ("time", args.time),
            ("sigma", args.sigma),
        )
        if value is not None
    }
    if model:
        overrides["model"] = model

    option = {
        key: value
        for key, value in (
            ("spot", args.spot),
            ("strike", args.strike),
            ("horizon", args.horizon),
            ("styles", args.styles),
        )
        if value is not None
    }
    if option:
        overrides["option"] = option

    if args.chooser_step is not None:
        overrides["chooser"] = {"step": args.chooser_step}
    if args.output_dir is not None:
        overrides["output"] = {"dir": args.output_dir}
    if args.dry_run:
        overrides["dry_run"] = True

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def write_lattices(
    out_dir: Path, lattices: Mapping[str, TriangularLattice]
) -> dict[str, Path]:
    """Write one CSV per lattice (rows: down-moves, columns: steps)."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for name, lattice in lattices.items():
        path = out_dir / f"{name}.csv"
        lattice.to_frame().to_csv(path)
        written[name] = path
    return written


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    model_cfg = config["model"]
    option_cfg = config["option"]
    styles = coerce_option_styles(ensure_list(option_cfg.get("styles")) or [])
    chooser_step = (config.get("chooser") or {}).get("step")
    out_dir = resolve_path((config.get("output") or {}).get("dir"))
    dry_run = bool(config.get("dry_run", False))

    logger.info("Model:    %s", model_cfg)
    logger.info(
        "Option:   spot=%s strike=%s horizon=%s",
        option_cfg["spot"],
        option_cfg["strike"],
        option_cfg.get("horizon"),
    )
    logger.info("Styles:   %s", [style.value for style in styles])
    logger.info("Chooser:  %s", chooser_step)
    logger.info("Output:   %s", out_dir)

    if dry_run:
        log_dry_run(
            logger,
            {
                "action": "price_lattice",
                "model": model_cfg,
                "option": {**option_cfg, "styles": [s.value for s in styles]},
                "chooser_step": chooser_step,
                "output_dir": out_dir,
            },
        )
        return

    model = build_lattice_model(
        r=model_cfg["rate"],
        b=model_cfg["carry"],
        n=model_cfg["periods"],
        time=model_cfg["time"],
        sigma=model_cfg["sigma"],
    )
    logger.info(
        "Lattice:  %s",
        ", ".join(f"{key}={value:.6g}" for key, value in model.scalars().items()),
    )

    spot = option_cfg["spot"]
    strike = option_cfg["strike"]
    horizon = option_cfg.get("horizon")
    priced = price_option(model, spot, strike, horizon=horizon, styles=styles)
    results: dict[str, TriangularLattice] = {
        style.value: lattice for style, lattice in priced.items()
    }

    if chooser_step is not None:
        legs = price_option(
            model,
            spot,
            strike,
            horizon=horizon,
            styles=[OptionStyle.EUROPEAN_CALL, OptionStyle.EUROPEAN_PUT],
        )
        results["chooser"] = chooser_lattice(
            model,
            legs[OptionStyle.EUROPEAN_CALL],
            legs[OptionStyle.EUROPEAN_PUT],
            chooser_step,
        )

    for name, lattice in results.items():
        logger.info("Price %-8s %.6f", name, lattice.root)

    if out_dir is not None:
        for name, path in write_lattices(out_dir, results).items():
            logger.info("Wrote %s -> %s", name, path)


if __name__ == "__main__":
    main()
