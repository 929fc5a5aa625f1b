#!/usr/bin/env python3

import sys
import argparse
from pathlib import Path
from typing import Callable, List, Optional

from rich.markup import escape
from rich.prompt import Confirm, Prompt  # type: ignore

# Explicit imports from the qcscalepy package
from qcscalepy.constants import DEFAULT_CONFIG, EXIT_FAILURE, EXIT_SUCCESS, QC_EXTENSION
from qcscalepy.qcexceptions import (
    FileAccessError,
    MarkerMismatchError,
    NoInputFilesError,
    QCScaleError,
    UserDeclinedError,
)
from qcscalepy.qcfile import (
    find_eyelid_splits,
    find_flex_references,
    find_model_name,
    find_procedural_bones,
    rewrite_qc,
)
from qcscalepy.qcio import read_document, write_document
from qcscalepy.qcpprint import (
    pprint_error,
    pprint_eyelid_splits,
    pprint_flex_references,
    pprint_info,
    pprint_qc_result,
    pprint_text,
    pprint_vrd_result,
    pprint_warning,
)
from qcscalepy.qcscale import (
    ScaleRequest,
    prompt_new_scale,
    read_previous_scale,
    validate_new_scale,
)
from qcscalepy.vrdfile import VRDRescaler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Change the $scale of a QC file and correct the eyeball, "
        "procedural bone (.vrd) and model name values $scale does not handle.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "filename",
        metavar="filename",
        type=str,
        nargs="?",
        help="QC file to rescale. When omitted the current directory is searched.",
    )
    parser.add_argument(
        "-s",
        "--scale",
        type=str,
        default=None,
        help="New absolute scale. Prompted for when omitted.",
    )
    parser.add_argument(
        "--vrd",
        type=str,
        default=None,
        help="Procedural bones file to rescale. Defaults to the file named by "
        "$proceduralbones in the QC.",
    )
    parser.add_argument(
        "--no-vrd",
        action="store_true",
        default=False,
        help="Do not touch any procedural bones file.",
    )
    parser.add_argument(
        "--no-rename",
        action="store_true",
        default=False,
        help="Do not add a _x<scale> suffix to $modelname.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        default=False,
        help="Answer yes to every confirmation.",
    )
    parser.add_argument(
        "-n",
        "--nocolour",
        action="store_true",
        default=False,
        help="Do not use colours in the output.",
    )
    return parser


def discover_qc_files(directory: Path) -> List[Path]:
    """Returns the QC files directly inside a directory, sorted by name."""
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == QC_EXTENSION
    )


def choose_qc_file(
    filename: Optional[str],
    ask: Callable[..., str] = Prompt.ask,
    nocolour: bool = False,
) -> Path:
    """
    Resolves the QC file to work on.

    Raises:
        NoInputFilesError: If the given file does not exist or no QC file is found.
    """
    if filename is not None:
        qc_path = Path(filename).expanduser()
        if not qc_path.is_file():
            raise NoInputFilesError(f"QC file not found - {qc_path}")
        return qc_path

    candidates = discover_qc_files(Path.cwd())
    if not candidates:
        raise NoInputFilesError(f"No {QC_EXTENSION} files found in {Path.cwd()}")
    if len(candidates) == 1:
        return candidates[0]
    for i, candidate in enumerate(candidates, 1):
        pprint_text(f"[#404040]{i:3d}:[/] [white]{escape(candidate.name)}[/white]", nocolour)
    choices = [str(i) for i in range(1, len(candidates) + 1)]
    answer = ask("Which QC file", choices=choices, default="1")
    return candidates[int(answer) - 1]


def confirm(question: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    return Confirm.ask(question, default=True)


def resolve_vrd_path(args: argparse.Namespace, qc_path: Path, qc_lines: List[str]) -> Optional[Path]:
    """
    Returns the procedural bones file to rescale, or None when there is none.

    Raises:
        FileAccessError: If a file given with --vrd does not exist.
    """
    if args.no_vrd:
        return None
    if args.vrd is not None:
        vrd_path = Path(args.vrd).expanduser()
        if not vrd_path.is_file():
            raise FileAccessError(f"VRD file not found - {vrd_path}")
        return vrd_path
    reference = find_procedural_bones(qc_lines, DEFAULT_CONFIG)
    if reference is None:
        pprint_info("No $proceduralbones in the QC, no .vrd file to rescale.", args.nocolour)
        return None
    vrd_path = qc_path.parent / reference.replace("\\", "/")
    if not vrd_path.is_file():
        pprint_warning(
            f"$proceduralbones file {reference} was not found next to the QC, skipped.",
            args.nocolour,
        )
        return None
    return vrd_path


def rescale(args: argparse.Namespace) -> int:
    """Runs one rescale of a QC file and its procedural bones file."""
    nocolour = args.nocolour

    qc_path = choose_qc_file(args.filename, nocolour=nocolour)
    qc_document = read_document(qc_path)
    qc_lines = qc_document.lines

    flex_refs = find_flex_references(qc_lines, DEFAULT_CONFIG)
    if flex_refs:
        pprint_flex_references(flex_refs, nocolour)
        if not confirm("Continue anyway?", args.yes):
            raise UserDeclinedError("Rescale cancelled, no files were changed.")

    previous = read_previous_scale(qc_lines, DEFAULT_CONFIG)
    request: ScaleRequest
    if args.scale is not None:
        request = validate_new_scale(args.scale, previous, DEFAULT_CONFIG)
    else:
        request = prompt_new_scale(
            previous,
            ask=Prompt.ask,
            on_error=lambda message: pprint_error(message, nocolour),
            config=DEFAULT_CONFIG,
        )
    if request.has_rounding_risk(DEFAULT_CONFIG):
        pprint_warning(
            "Scales this small can introduce visible rounding errors in the QC values.",
            nocolour,
        )
    pprint_info(
        f"Scaling {qc_path.name} to {request.display_new} "
        f"(x{request.display_relative} of the current size)",
        nocolour,
    )

    rename = False
    if args.no_rename:
        rename = False
    elif find_model_name(qc_lines, DEFAULT_CONFIG) is None:
        pprint_warning("No $modelname found, the model name was not changed.", nocolour)
    else:
        rename = confirm("Add the scale to the $modelname file name?", args.yes)

    vrd_path = resolve_vrd_path(args, qc_path, qc_lines)
    # Read before the QC is written so an unusable .vrd aborts the whole run
    vrd_document = read_document(vrd_path) if vrd_path is not None else None

    result = rewrite_qc(qc_lines, request, rename=rename, config=DEFAULT_CONFIG)
    write_document(qc_path, qc_document.replaced(result.lines))
    pprint_qc_result(result, request, nocolour)

    splits = find_eyelid_splits(result.lines, DEFAULT_CONFIG)
    if splits:
        pprint_eyelid_splits(splits, nocolour)

    if vrd_path is not None and vrd_document is not None:
        pprint_info(f"Rescaling procedural bones in {vrd_path.name}", nocolour)
        vrd_result = VRDRescaler(DEFAULT_CONFIG).rescale_document(
            vrd_path, vrd_document, request.new, request.previous
        )
        pprint_vrd_result(vrd_result, nocolour)

    return EXIT_SUCCESS


def run(argv: Optional[List[str]] = None) -> int:
    """Parses arguments, runs the rescale and maps failures to exit codes."""
    args = build_parser().parse_args(argv)
    try:
        return rescale(args)
    except UserDeclinedError as e:
        pprint_warning(str(e), args.nocolour)
        return e.exit_code
    except MarkerMismatchError as e:
        pprint_error(str(e), args.nocolour)
        pprint_info(
            "The .vrd file was edited after its normalization block was written. "
            f"Delete the block starting at '{DEFAULT_CONFIG.marker_sentinel}', restore "
            "the values for the current $scale and run again. The QC file was "
            "already updated.",
            args.nocolour,
        )
        return e.exit_code
    except QCScaleError as e:
        pprint_error(str(e), args.nocolour)
        return e.exit_code
    except Exception as e:
        pprint_error(f"Unexpected {type(e).__name__}: {e}", args.nocolour)
        return EXIT_FAILURE


def main() -> None:
    """Entry point of the qcscale console script."""
    sys.exit(run())


if __name__ == "__main__":
    main()
