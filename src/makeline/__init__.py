"""makeline - Declare build targets with dependencies and run them in order."""

from .commands import Command as Command
from .context import Context as Context
from .errors import BuildResult as BuildResult
from .errors import CommandError as CommandError
from .errors import CycleDetectedError as CycleDetectedError
from .errors import UnknownTargetError as UnknownTargetError
from .executor import Executor as Executor
from .executor import evaluate as evaluate
from .executor import run as run
from .registry import Registry as Registry
from .resolve import Resolver as Resolver
from .targets import Target as Target
from .targets import TargetOptions as TargetOptions
