#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb 23 10:02:45 2026

@author: petermillington
"""

"""
Unit tests for LogSink
"""
import pandas as pd
import pytest
from data.log_sink import LogSink


class TestLogSinkMemory:
    """Test in-memory row logging"""

    def test_header_is_first_data_row(self):
        """Test header is stored ahead of the rows"""
        sink = LogSink().set_header(['period', 'volume'])
        sink.write([1, 3])

        assert sink.data == [['period', 'volume'], [1, 3]]
        assert sink.rows == [[1, 3]]
        assert len(sink) == 1

    def test_none_rows_are_ignored(self):
        """Test that writing None leaves the log unchanged"""
        sink = LogSink(header=['period', 'open', 'high', 'low', 'close'])
        sink.write(None)

        assert sink.rows == []
        assert sink.last is None

    def test_last_by_key(self):
        """Test last written value per column"""
        sink = LogSink(header=['period', 'open', 'high', 'low', 'close'])
        sink.write([1, 50, 60, 40, 55])
        sink.write([2, 52, 70, 45, 60])

        assert sink.last_by_key('high') == 70
        assert sink.last_by_key('low') == 45
        assert sink.last_by_key('missing') is None

    def test_last_by_key_without_rows_or_header(self):
        """Test last_by_key returns None when there is nothing to read"""
        assert LogSink(header=['high']).last_by_key('high') is None
        headerless = LogSink()
        headerless.write([1, 2, 3])
        assert headerless.last_by_key('high') is None

    def test_header_after_rows_rejected(self):
        """Test header cannot be changed once rows exist"""
        sink = LogSink(header=['a'])
        sink.write([1])
        with pytest.raises(ValueError):
            sink.set_header(['b'])

    def test_to_frame(self):
        """Test conversion to DataFrame"""
        sink = LogSink(header=['period', 'volume'])
        sink.write([1, 0])
        sink.write([2, 4])

        df = sink.to_frame()
        assert list(df.columns) == ['period', 'volume']
        assert df['volume'].tolist() == [0, 4]


class TestLogSinkFile:
    """Test CSV file output"""

    def test_rows_appended_to_csv(self, tmp_path):
        """Test file gets header once followed by every row"""
        path = tmp_path / "logs" / "volume.csv"
        sink = LogSink(str(path), header=['period', 'volume'])
        sink.write([1, 2])
        sink.write(None)
        sink.write([2, 5])

        df = pd.read_csv(path)
        assert list(df.columns) == ['period', 'volume']
        assert df.values.tolist() == [[1, 2], [2, 5]]

    def test_nothing_written_without_rows(self, tmp_path):
        """Test no file is created until the first row"""
        path = tmp_path / "trade.csv"
        LogSink(str(path), header=['period'])
        assert not path.exists()

    def test_headerless_file(self, tmp_path):
        """Test rows of a log without header"""
        path = tmp_path / "profit.csv"
        sink = LogSink(str(path))
        sink.write([10.0, 20.0])
        sink.write([15.0, 25.0])

        lines = path.read_text().strip().splitlines()
        assert lines == ["10.0,20.0", "15.0,25.0"]
