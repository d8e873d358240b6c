#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Feb 10 09:41:12 2026

@author: petermillington

Append-only row logs for the simulation (trade, orders, ohlc, ...).
"""
import os
from typing import Any, List, Optional, Sequence

import pandas as pd


class LogSink:
    """
    Append-only row writer with an optional fixed header.

    Rows are always kept in memory.  When a path is given every row is also
    appended to a CSV file; the header line is written once, on the first
    write, so a sink can be created and configured before anything exists on
    disk.

    Attributes
    ----------
    path : str or None
        CSV file receiving the rows, None for memory only.
    header : list or None
        Column names.  `last_by_key` needs a header.
    data : list
        Header (if set) followed by every row written.
    """

    def __init__(self, path: Optional[str] = None, header: Optional[Sequence[str]] = None):
        self.path = path
        self.header: Optional[List[str]] = None
        self.data: List[List[Any]] = []
        self._file_started = False
        if header is not None:
            self.set_header(header)

    def set_header(self, header: Optional[Sequence[str]]) -> "LogSink":
        """Set column names.  Returns self so calls can be chained."""
        if header is None:
            return self
        if self.rows:
            raise ValueError("LogSink.set_header: header must be set before rows are written")
        self.header = list(header)
        self.data = [self.header]
        return self

    @property
    def rows(self) -> List[List[Any]]:
        """Rows written so far, without the header."""
        return self.data[1:] if self.header is not None else self.data

    @property
    def last(self) -> Optional[List[Any]]:
        rows = self.rows
        return rows[-1] if rows else None

    def write(self, row: Optional[Sequence[Any]]) -> None:
        """Append a row.  None is ignored so reducers can skip a row."""
        if row is None:
            return
        row = list(row)
        self.data.append(row)
        if self.path is not None:
            self._append_to_file(row)

    def last_by_key(self, key: str) -> Any:
        """Last written value of column `key`, or None."""
        if self.header is None or key not in self.header:
            return None
        last = self.last
        if last is None:
            return None
        idx = self.header.index(key)
        return last[idx] if idx < len(last) else None

    def to_frame(self) -> pd.DataFrame:
        """Rows as a DataFrame (columns from the header when set)."""
        rows = self.rows
        if self.header is not None:
            return pd.DataFrame(rows, columns=self.header)
        return pd.DataFrame(rows)

    def __len__(self) -> int:
        return len(self.rows)

    def _append_to_file(self, row: List[Any]) -> None:
        df_row = pd.DataFrame([row], columns=self.header if self.header is not None else None)
        if not self._file_started:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            df_row.to_csv(self.path, index=False, header=self.header is not None)
            self._file_started = True
        else:
            df_row.to_csv(self.path, mode="a", index=False, header=False)
