#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Fri Feb 20 10:12:37 2026

@author: petermillington

Stand-alone run
- Reads a simulation config (config.json by default) and runs every period
  synchronously.
- Writes the current period number to a marker file after each period.
- Optionally saves the logs, the per-period summary and a PDF report into a
  timestamped run folder.
"""

import sys
import os
sys.path.append(os.path.abspath(os.path.join
                                (os.path.dirname(__file__), '..')))  #ensure modules are accessible
import argparse
from dataclasses import replace

from core.sim_config import load_config
from core.simulation import Simulation
from analysis.period_report import period_summary, plot_period_report
from utils.logger import RunLogger, log_simulation, config_to_dict


def write_period_marker(path: str):
    """Update hook: records the last completed period in `path`."""
    def update(sim):
        with open(path, "w") as f:
            f.write(str(sim.period))
    return update


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Single-market robot trading simulation")
    parser.add_argument("--config", default="./config.json", help="path to simulation config JSON")
    parser.add_argument("--period-file", default="./period", help="file updated with the last completed period")
    parser.add_argument("--log-dir", default=None, help="write each log as <log-dir>/<name>.csv while running")
    parser.add_argument("--save-dir", default=None, help="save logs, summary and report into a run folder here")
    parser.add_argument("--quiet", action="store_true", help="suppress console messages")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = load_config(args.config)
    if args.log_dir:
        config = replace(config, log_dir=args.log_dir, log_to_file_system=True)
    if args.quiet:
        config = replace(config, silent=True)

    sim = Simulation(config)
    sim.run(sync=True, update=write_period_marker(args.period_file))

    summary = period_summary(sim)
    log_simulation([
        f"config: {args.config}",
        f"periods: {sim.period}",
        f"agents: {sim.number_of_buyers} buyers, {sim.number_of_sellers} sellers",
        f"trades: {int(summary['volume'].sum())}",
        f"max gains from trade: {sim.get_maximum_possible_gains_from_trade()}",
    ])

    if args.save_dir:
        run_logger = RunLogger(base_save_dir=args.save_dir, seed=config.seed)
        run_logger.log_params(config_to_dict(config))
        run_logger.log_logs(sim)
        run_logger.log_table(summary, "period_summary")
        plot_period_report(sim, run_logger.get_dir())
        run_logger.close()
    return sim


if __name__ == "__main__":
    main()
