"""Default workspace collaborators used when no editor supplies its own."""

from gocomplete.infrastructure.workspace.imports import PreludeImportEditor
from gocomplete.infrastructure.workspace.modules import GoEnvModuleDetector
from gocomplete.infrastructure.workspace.naming import FilenamePackageGuesser, guess_package_names
from gocomplete.infrastructure.workspace.packages import GopkgsPackageSource, parse_gopkgs_output
from gocomplete.infrastructure.workspace.roots import GopathPackageRoot

__all__ = [
    "PreludeImportEditor",
    "GoEnvModuleDetector",
    "FilenamePackageGuesser",
    "guess_package_names",
    "GopkgsPackageSource",
    "parse_gopkgs_output",
    "GopathPackageRoot",
]
