"""Tests for command implementation modules.

Test Files and Coverage:
========================

| Test File     | Test Classes | Tested Constructs      | Tested Functionalities                                   |
|---------------|--------------|------------------------|----------------------------------------------------------|
| test_scan.py  | DoScanTest   | do_scan(), is_archive() | Input dispatch, first-seen-wins, counts, idempotence     |
"""
