"""Shared test configuration and fixtures."""

import logging

import pytest

from mkvcon.cli import cleanup_logging


@pytest.fixture(scope="function", autouse=True)
def cleanup_logging_handlers():
    """Automatically cleanup logging handlers after each test to prevent ResourceWarnings."""
    yield
    cleanup_logging()


@pytest.fixture(scope="function", autouse=True)
def reset_logging():
    """Reset logging configuration after each test."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)


@pytest.fixture
def sample_robot_output():
    """Robot output from an info scan of a two-title Blu-ray."""
    return """MSG:1005,0,1,"MakeMKV v1.17.7 linux(x64-release) started","%1 started","MakeMKV v1.17.7 linux(x64-release)"
DRV:0,2,999,1,"BD-RE HL-DT-ST BD-RE  WH16NS60","MY_DISC","/dev/sr0"
DRV:1,256,999,0,"","",""
TCOUT:2
CINFO:1,6209,"Blu-ray disc"
CINFO:2,0,"My Disc"
CINFO:32,0,"MY_DISC"
TINFO:0,2,0,"My Disc"
TINFO:0,8,0,"24"
TINFO:0,9,0,"2:15:30"
TINFO:0,10,0,"25.3 GB"
TINFO:0,16,0,"00800.mpls"
SINFO:0,0,1,6201,"Video"
SINFO:0,0,6,0,"Mpeg4"
SINFO:0,1,1,6202,"Audio"
SINFO:0,1,3,0,"eng"
TINFO:1,2,0,"My Disc"
TINFO:1,9,0,"0:05:43"
TINFO:1,16,0,"00012.m2ts"
MSG:5011,0,0,"Operation successfully completed","Operation successfully completed"
"""
