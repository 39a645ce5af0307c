from . import command
from . import config
from . import kcov
from . import report
from . import runner
