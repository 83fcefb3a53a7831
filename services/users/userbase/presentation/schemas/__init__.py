from .users import *
from .envelopes import Envelope, ErrorEnvelope
