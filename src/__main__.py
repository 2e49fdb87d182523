#!/usr/bin/env python3
"""
assetrev - Revved asset reference rewriter

Rewrites the static-asset references of HTML and CSS documents so they point
at the content-addressed ("revved") files an earlier build step produced.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Each document goes through two passes:
    - Block replacement: <!-- build:js dest --> ... <!-- endbuild --> blocks
      collapse into one tag referencing dest
    - Reference rewriting: script/link/img/anchor/url() references are looked
      up in the rev manifest and replaced, query strings and fragments kept

Usage:
    assetrev inputdir/ outputdir/

    Every document matching --inputPattern under inputdir/ is rewritten into
    the same relative location under outputdir/.

Examples:
    # HTML pages, manifest at inputdir/rev-manifest.json
    assetrev site/ dist/

    # Stylesheets, YAML manifest, verbose output
    assetrev site/ dist/ --inputPattern '**/*.css' --manifest rev.yaml -vv

    # Resolve references against explicit directories
    assetrev site/ dist/ --searchPath site,site/vendor
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Dict

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    Processor,
    ManifestFinder,
    document_load,
    AssetRevError,
    __version__,
    LOG,
    state_connectToLogger,
    logSink_make,
)
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="assetrev - point HTML/CSS asset references at revved files",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputPattern",
    default="**/*.html",
    type=str,
    help="Glob (relative to inputdir) selecting the documents to rewrite",
)

parser.add_argument(
    "--pattern",
    default="auto",
    choices=["auto", "html", "css"],
    help="Pattern preset; 'auto' picks one from each file's extension",
)

parser.add_argument(
    "--manifest",
    default=None,
    type=str,
    help=f"Rev manifest (JSON or YAML) relative to inputdir. Defaults to {appsettings.manifest_file}",
)

parser.add_argument(
    "--searchPath",
    default="",
    type=str,
    help="Comma-separated directories overriding each document's own search path",
)

parser.add_argument(
    "--strict",
    action="store_true",
    default=False,
    help="Fail on blocks missing from a document and on assets missing from the manifest",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - manifestFile: Resolved path to the rev manifest
            - inputFiles: Documents matching inputPattern
            - envOK: True if environment is valid

    Exits:
        1 if the manifest is missing or no document matches
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    state.inputdir = state.inputdir.resolve()
    state.manifestFile = state.inputdir / (state.manifest or appsettings.manifest_file)
    if not state.manifestFile.exists():
        print(f"Error: Manifest not found: {state.manifestFile}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Manifest: {state.manifestFile}", level=2)

    state.inputFiles = sorted(p for p in state.inputdir.glob(state.inputPattern) if p.is_file())
    if not state.inputFiles:
        print(f"Error: No documents match {state.inputPattern} in {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Documents: {len(state.inputFiles)}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def manifest_read(inputstate: ProgramState) -> ProgramState:
    """
    Load the rev manifest into a finder.

    Returns:
        ProgramState with added field:
            - finder: ManifestFinder rooted at inputdir

    Exits:
        1 if the manifest cannot be parsed
    """
    state = inputstate.copy()

    LOG("Reading rev manifest...", level=1)
    try:
        state.finder = ManifestFinder.manifest_fromFile(
            state.manifestFile,
            root=state.inputdir,
            strict=state.strict or appsettings.strict_assets,
        )
    except AssetRevError as e:
        print(f"Manifest error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Loaded {len(state.finder.manifest)} manifest entries", level=2)
    return state


def documents_process(inputstate: ProgramState) -> ProgramState:
    """
    Rewrite every selected document into outputdir.

    One Processor is built per pattern preset and reused across documents.

    Returns:
        ProgramState with added field:
            - processResult: Dict containing:
                - status: bool
                - files: int (documents written)
                - changed: int (documents whose content changed)

    Exits:
        1 on the first document that fails to process
    """
    state = inputstate.copy()

    LOG("Rewriting documents...", level=1)

    processors: Dict[str, Processor] = {}
    search_path = state.searchPath_list()
    changed = 0

    for input_file in state.inputFiles:
        preset = state.pattern
        if preset == "auto":
            preset = appsettings.preset_forFile(input_file) or appsettings.default_pattern

        try:
            if preset not in processors:
                processors[preset] = Processor(
                    preset,
                    state.finder,
                    log=logSink_make(level=2),
                    strict=state.strict or None,
                )
            processor = processors[preset]

            LOG(f"{input_file.relative_to(state.inputdir)} ({preset})", level=1)
            document = document_load(input_file, encoding=appsettings.input_encoding)
            result = processor.process(document, search_path)
        except (AssetRevError, OSError, ValueError) as e:
            print(f"Error processing {input_file}: {e}", file=sys.stderr)
            if state.verbosity >= 3:
                import traceback

                traceback.print_exc()
            sys.exit(1)

        if result != document.content:
            changed += 1

        output_file = state.outputdir / input_file.relative_to(state.inputdir)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding=appsettings.input_encoding, newline="") as handle:
            handle.write(result)
        LOG(f"Wrote {output_file}", level=3)

    state.processResult = {
        "status": True,
        "files": len(state.inputFiles),
        "changed": changed,
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display processing results to user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if processResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.processResult:
        print("Error: Processing failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rewrite successful!", level=1)
    LOG(f"  Output:    {state.outputdir}", level=1)
    LOG(f"  Documents: {state.processResult['files']}", level=1)
    LOG(f"  Changed:   {state.processResult['changed']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="assetrev - Revved asset reference rewriter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - rewrite asset references of the documents in inputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths, collect documents
        2. manifest_read: Load the rev manifest into a finder
        3. documents_process: Rewrite each document into outputdir
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, manifest_read, documents_process, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
