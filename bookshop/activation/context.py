from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class LaunchKind(Enum):
    """Why the process (or window) was activated."""
    LAUNCH = "launch"
    COMMAND_LINE = "command_line"
    REACTIVATION = "reactivation"


@dataclass(frozen=True)
class LaunchContext:
    kind: LaunchKind = LaunchKind.LAUNCH
    args: Tuple[str, ...] = ()

    @property
    def is_reactivation(self) -> bool:
        return self.kind is LaunchKind.REACTIVATION

    def option(self, name: str) -> Optional[str]:
        """Value of ``--name value`` or ``--name=value`` in ``args``."""
        flag = f"--{name}"
        for index, arg in enumerate(self.args):
            if arg == flag and index + 1 < len(self.args):
                return self.args[index + 1]
            if arg.startswith(flag + "="):
                return arg[len(flag) + 1:]
        return None

    @classmethod
    def from_argv(cls, argv: Sequence[str], reactivation: bool = False) -> "LaunchContext":
        """
        Build a context from a full argv (program name first).
        """
        args = tuple(argv[1:])
        if reactivation:
            kind = LaunchKind.REACTIVATION
        elif args:
            kind = LaunchKind.COMMAND_LINE
        else:
            kind = LaunchKind.LAUNCH
        return cls(kind, args)
