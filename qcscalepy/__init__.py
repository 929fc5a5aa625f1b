"""
qcscalepy - Rescale Source engine QC models including what $scale misses.

This package changes the $scale directive of a QC file and corrects the
values studiomdl does not scale on its own: eyeball definitions in the QC
and the rest positions and trigger translations of a procedural bones
(.vrd) file. VRD files are rescaled from a normalization block stored in
the file itself, so they can be rescaled any number of times without
rounding errors adding up.

The main components are organized into submodules:
- constants: Keywords, line patterns, exit codes and the ScaleConfig value.
- qcexceptions: Exceptions and the exit codes they map to.
- qchelpers: Precision preserving number scaling and comment tracking.
- qclines: Typed recognizers for the QC and VRD line shapes.
- qcio: Whole-file reading and writing.
- qcscale: Previous/new scale resolution.
- qcfile: QC rewriting ($scale, eyeballs, $modelname suffix).
- vrdfile: VRD baseline capture and rescaling.
- qcpprint: Console reporting with rich.
"""

# fmt: off
__project__ = 'qcscalepy'
__version__ = '1.0.0'
# fmt: on

VERSION = f"{__project__}-{__version__}"

from .constants import (
    DEFAULT_CONFIG,
    EXIT_DECLINED,
    EXIT_EMPTY_FILE,
    EXIT_FAILURE,
    EXIT_FILE_LOCKED,
    EXIT_MARKER_MISMATCH,
    EXIT_NO_INPUT_FILES,
    EXIT_SUCCESS,
    ScaleConfig,
)
from .qcexceptions import (
    EmptyFileError,
    FileAccessError,
    MarkerMismatchError,
    NoInputFilesError,
    QCScaleError,
    ScaleInputError,
    UserDeclinedError,
)
from .qchelpers import (
    CommentTracker,
    decimal_places,
    detect_newline,
    format_scale_value,
    normalize_value,
    scale_num,
)
from .qclines import (
    EyeballLine,
    HelperMarker,
    ModelNameLine,
    RestPosition,
    RestRecord,
    ScaleDirective,
    Translation,
    TranslationRecord,
    classify_vrd_line,
)
from .qcio import TextDocument, read_document, write_document
from .qcscale import ScaleRequest, read_previous_scale, validate_new_scale
from .qcfile import (
    QCResult,
    find_eyelid_splits,
    find_flex_references,
    find_procedural_bones,
    place_scale_directive,
    rename_model,
    rescale_eyeballs,
    rewrite_qc,
    scaled_model_path,
)
from .vrdfile import BaselineStore, VRDRescaler, VRDResult, capture_baseline

__all__ = [
    # .constants
    "DEFAULT_CONFIG",
    "EXIT_DECLINED",
    "EXIT_EMPTY_FILE",
    "EXIT_FAILURE",
    "EXIT_FILE_LOCKED",
    "EXIT_MARKER_MISMATCH",
    "EXIT_NO_INPUT_FILES",
    "EXIT_SUCCESS",
    "ScaleConfig",
    # .qcexceptions
    "EmptyFileError",
    "FileAccessError",
    "MarkerMismatchError",
    "NoInputFilesError",
    "QCScaleError",
    "ScaleInputError",
    "UserDeclinedError",
    # .qchelpers
    "CommentTracker",
    "decimal_places",
    "detect_newline",
    "format_scale_value",
    "normalize_value",
    "scale_num",
    # .qclines
    "EyeballLine",
    "HelperMarker",
    "ModelNameLine",
    "RestPosition",
    "RestRecord",
    "ScaleDirective",
    "Translation",
    "TranslationRecord",
    "classify_vrd_line",
    # .qcio
    "TextDocument",
    "read_document",
    "write_document",
    # .qcscale
    "ScaleRequest",
    "read_previous_scale",
    "validate_new_scale",
    # .qcfile
    "QCResult",
    "find_eyelid_splits",
    "find_flex_references",
    "find_procedural_bones",
    "place_scale_directive",
    "rename_model",
    "rescale_eyeballs",
    "rewrite_qc",
    "scaled_model_path",
    # .vrdfile
    "BaselineStore",
    "VRDRescaler",
    "VRDResult",
    "capture_baseline",
    # Package version info
    "__project__",
    "__version__",
    "VERSION",
]
