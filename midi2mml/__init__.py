# coding:utf-8
"""
midi2mml converts standard MIDI files into MML (Music Macro Language)
text, one staff for each MIDI channel and simultaneous-note lane.
"""
# Copyright (C) 2025  The midi2mml authors

from midi2mml._version import __version__
from midi2mml.utils import *
from midi2mml.utils import __all__ as _utils_all
from midi2mml.event import *
from midi2mml.event import __all__ as _event_all
from midi2mml.smf import *
from midi2mml.smf import __all__ as _smf_all
from midi2mml.tempo import *
from midi2mml.tempo import __all__ as _tempo_all
from midi2mml.duration import *
from midi2mml.duration import __all__ as _duration_all
from midi2mml.track import *
from midi2mml.track import __all__ as _track_all
from midi2mml.mml import *
from midi2mml.mml import __all__ as _mml_all
from midi2mml.mmlscan import *
from midi2mml.mmlscan import __all__ as _mmlscan_all
from midi2mml.converter import *
from midi2mml.converter import __all__ as _converter_all

__all__ = ['__version__'] + _utils_all + _event_all + _smf_all + \
    _tempo_all + _duration_all + _track_all + _mml_all + _mmlscan_all + \
    _converter_all
