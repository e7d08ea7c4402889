# -*- coding: utf-8 -*-

import configparser

import pytest

from pledge import config
from pledge.scheduler import CallbackQueue


@pytest.fixture
def queue():
    """Fresh callback queue, without drain limit."""
    return CallbackQueue(drain_limit=0)


@pytest.fixture
def config_file(tmpdir, monkeypatch):
    """Isolate the config module: empty settings, file in a temp dir."""
    parser = configparser.ConfigParser()
    parser.add_section('config')
    path = str(tmpdir.join('conf', 'pledge.ini'))

    monkeypatch.setattr(config, '_config_parser', parser)
    monkeypatch.setattr(config, '_get_config_file_path', lambda: path)
    return path
