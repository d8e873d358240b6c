#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Wed Aug 20 13:40:54 2025

@author: petermillington
"""
# utils/logger.py
import os
import json
from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Optional, Dict, Any, List

import pandas as pd


# -----------------------------
# Simple append-only text logger
# -----------------------------
def log_simulation(metadata: List[str], log_path: str = "logs/simulation_log.txt") -> None:
    """
    Append human-readable run metadata (config, periods, outcome) to a
    single rolling log file.
    """
    folder = os.path.dirname(log_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(log_path, "a") as f:
        f.write("\n" + "=" * 60 + "\n")
        f.write(f"[{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}]\n")
        for line in metadata:
            f.write(str(line) + "\n")
        f.write("=" * 60 + "\n")


def _ts() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def config_to_dict(config) -> Dict[str, Any]:
    """JSON-friendly dict of a (possibly nested) config dataclass."""
    if is_dataclass(config):
        return asdict(config)
    return dict(config)


# -----------------------------
# Per-run output folder
# -----------------------------
class RunLogger:
    """
    Output folder for one simulation run.

    Creates <base_save_dir>/<timestamp>[_<run_id>] and provides:
      - log_params(dict)        -> params.json
      - log_table(df, name)     -> name.csv
      - log_logs(sim)           -> one csv per enabled simulation log
      - close()                 -> stamps end_time in run_info.json
    """

    def __init__(
        self,
        base_save_dir: str = "simulation_runs",
        run_id: Optional[str] = None,
        tags: Optional[List[str]] = None,
        seed: Optional[int] = None,
    ):
        ts = _ts()
        folder_bits = [ts]
        if run_id:
            folder_bits.append(run_id)
        self.save_dir = os.path.join(base_save_dir, "_".join(folder_bits))
        os.makedirs(self.save_dir, exist_ok=True)

        self._run_info_path = os.path.join(self.save_dir, "run_info.json")
        self.run_info = {
            "start_time": ts,
            "end_time": None,
            "run_id": run_id,
            "tags": tags or [],
            "seed": seed,
            "save_dir": self.save_dir,
        }
        self._write_run_info()

    def _write_run_info(self) -> None:
        with open(self._run_info_path, "w") as f:
            json.dump(self.run_info, f, indent=2)

    def close(self) -> None:
        self.run_info["end_time"] = _ts()
        self._write_run_info()

    def log_params(self, params: Dict[str, Any], filename: str = "params.json") -> str:
        path = os.path.join(self.save_dir, filename)
        with open(path, "w") as f:
            json.dump(params, f, indent=2, default=str)
        return path

    def log_table(self, df: pd.DataFrame, name: str) -> str:
        if not name.lower().endswith(".csv"):
            name += ".csv"
        path = os.path.join(self.save_dir, name)
        df.to_csv(path, index=False)
        return path

    def log_logs(self, sim) -> List[str]:
        """Save every in-memory simulation log as <name>.csv in the run folder."""
        return [self.log_table(sink.to_frame(), name) for name, sink in sim.logs.items()]

    def get_dir(self) -> str:
        return self.save_dir
