"""Read and write Standard MIDI Files (SMF) in memory."""

from .cursor import ByteCursor  # noqa: F401
from .errors import (  # noqa: F401
    InvalidFileHeader,
    InvalidTicksPerBeat,
    MalformedVLQ,
    OutOfBounds,
    SMFError,
    UnspecifiedEventType,
)
from .events import (  # noqa: F401
    AFTER_TOUCH,
    CHANNEL_AFTERTOUCH,
    CONTROLLER,
    END_OF_TRACK,
    IGNORE,
    NOTE_OFF,
    NOTE_ON,
    PARAM_COUNTS,
    PITCH_BEND,
    PROGRAM_CHANGE,
    TEMPO,
    ChannelEvent,
    Event,
    MetaEvent,
)
from .midifile import (  # noqa: F401
    HEADER_SIZE,
    MidiFile,
    MidiHeader,
)
from .reader import extract_event  # noqa: F401
from .track import END_BYTES, START_BYTES, Track  # noqa: F401
from .vlq import (  # noqa: F401
    MAX_VLQ_BYTES,
    decode_tick_delta,
    decode_vlq_bytes,
    encode_tick_delta,
)
