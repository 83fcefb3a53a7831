from .users import *
from .rules import ValidationErrors
