"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field

from .pathmatch import IOPair


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the expansion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: templates, outputs, verbosity, varsFile, highlight
        - env_check: ioPairs, seedVariables, envOK
        - templates_expand: expandResults, exitCode
        - results_report: (no additions, terminal stage)

    Attributes:
        templates: Template paths from the command line (empty means stdin)
        outputs: Output paths or wildcard specs (empty means stdout)
        verbosity: Logging verbosity level (1-3)
        varsFile: Optional YAML file of variables to seed each run with
        highlight: Print each template with syntax highlighting before expanding
        envOK: Environment validation passed
        ioPairs: Templates matched with their outputs
        seedVariables: Variables loaded from varsFile
        expandResults: One result dict per expanded template
        exitCode: Process exit status
    """

    # CLI arguments
    templates: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    verbosity: int = field(default=1)
    varsFile: Optional[str] = field(default=None)
    highlight: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    ioPairs: List[IOPair] = field(default_factory=list)
    seedVariables: Dict[str, str] = field(default_factory=dict)
    expandResults: List[Dict[str, Any]] = field(default_factory=list)
    exitCode: int = field(default=0)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all known CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # argparse leaves list options as None when they are not given
        filtered_options = {
            k: v for k, v in options_dict.items() if k in valid_fields and v is not None
        }
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            templates_expand,
            results_report
        )

    This is equivalent to:
        results_report(templates_expand(env_check(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
