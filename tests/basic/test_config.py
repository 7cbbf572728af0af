"""Test the configuration settings and their effect on display"""
import logging

import pytest

from errc import config, ErrorValue


@pytest.fixture
def display():
    """Gives the display section of the config, restoring it afterwards"""
    saved = dict(config.data['display'])
    yield config.data['display']
    for k, v in saved.items():
        config.data['display'][k] = v


def test_defaults_loaded():
    assert config.data.has_section('display')
    assert config.data.has_section('logging')
    assert config.getSigFigs() >= 1
    assert isinstance(config.getLogLevel(), int)


def test_sigfigs_setting(display):
    display['sigfigs'] = '3'
    display['plusminus'] = '±'
    assert str(ErrorValue(3.14159265, 0.0123456)) == "3.14 ± 0.0123"


def test_bad_sigfigs_setting(display):
    display['sigfigs'] = '0'
    assert config.getSigFigs() == 1


def test_plusminus_setting(display):
    display['plusminus'] = '+/-'
    display['sigfigs'] = '6'
    assert str(ErrorValue(1.5, 0.25)) == "1.5 +/- 0.25"


def test_log_level():
    saved = config.data['logging']['level']
    try:
        config.data['logging']['level'] = 'debug'
        assert config.getLogLevel() == logging.DEBUG
        config.data['logging']['level'] = 'nonsense'
        assert config.getLogLevel() == logging.WARNING
    finally:
        config.data['logging']['level'] = saved
