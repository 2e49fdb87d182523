"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rewrite pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputPattern, pattern,
          manifest, searchPath, strict
        - env_check: manifestFile, inputFiles, envOK
        - manifest_read: finder
        - documents_process: processResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory holding the documents and the rev manifest
        outputdir: Directory the rewritten documents are written to
        verbosity: Logging verbosity level (1-3)
        inputPattern: Glob (relative to inputdir) selecting documents
        pattern: Pattern preset name, or "auto" to pick by file extension
        manifest: Rev manifest filename (relative to inputdir)
        searchPath: Comma-separated search path override (empty = per document)
        strict: Fail on missing blocks and unresolvable assets
        envOK: Environment validation passed
        manifestFile: Resolved path to the rev manifest
        inputFiles: Resolved paths of the documents to process
        finder: Finder built from the manifest
        processResult: Processing results (files, changed, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputPattern: str = field(default="**/*.html")
    pattern: str = field(default="auto")
    manifest: Optional[str] = field(default=None)
    searchPath: str = field(default="")
    strict: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    manifestFile: Path = field(default=Path("/"))
    inputFiles: List[Path] = field(default_factory=list)
    finder: Optional[Any] = field(default=None)  # ManifestFinder at runtime
    processResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputPattern, manifest, etc.)
            inputdir: Directory containing source documents
            outputdir: Directory for rewritten output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Drop anything argparse knows about that the state does not
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)

    def searchPath_list(self) -> List[str]:
        """Split the comma-separated --searchPath option into absolute directories"""
        return [str(Path(entry.strip()).resolve()) for entry in self.searchPath.split(",") if entry.strip()]


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
            manifest_read,
            documents_process,
            results_report
        )

    This is equivalent to:
        results_report(documents_process(manifest_read(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
