"""
Manifest-backed Finder

Resolves asset references through a rev manifest, the mapping an earlier
fingerprinting step writes out:

    {"js/app.js": "js/app.1a2b3c4d.js", "css/site.css": "css/site.9f8e7d6c.css"}

Manifests are read with PyYAML, so both JSON and YAML files work.
"""

import os
import posixpath
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

import yaml

from .errors import AssetNotFoundError, ManifestError
from .log import LOG


def manifest_load(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read a rev manifest

    Args:
        path: JSON or YAML file mapping original paths to revved paths

    Returns:
        The mapping, keys and values as strings

    Raises:
        ManifestError: The file is missing, unparsable, or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must map original paths to revved paths")

    return {str(key): str(value) for key, value in data.items()}


def path_posix(path: str) -> str:
    """Normalize separators so OS paths compare against manifest keys"""
    return str(path).replace(os.sep, "/")


class ManifestFinder:
    """
    Finder looking references up in a rev manifest

    A site-root reference is tried as a manifest key first, then joined onto
    each search directory. A relative one is only joined onto the search
    directories, unless there are none. The first manifest hit wins.
    The revved basename replaces the reference's basename; its directory part
    is kept, so relative references stay relative.

    On a miss the reference is returned unchanged, or AssetNotFoundError is
    raised when strict.
    """

    def __init__(
        self,
        manifest: Mapping[str, str],
        root: Optional[Union[str, Path]] = None,
        strict: bool = False,
    ) -> None:
        """
        Args:
            manifest: Original path -> revved path
            root: Directory manifest keys are relative to; search directories
                  under it are made relative before lookup
            strict: Raise on unresolvable references
        """
        self.manifest = {posixpath.normpath(path_posix(k).lstrip("/")): v for k, v in manifest.items()}
        self.root = posixpath.normpath(path_posix(root)) if root is not None else None
        self.strict = strict

    @classmethod
    def manifest_fromFile(
        cls,
        path: Union[str, Path],
        root: Optional[Union[str, Path]] = None,
        strict: bool = False,
    ) -> "ManifestFinder":
        """Build a finder from a manifest file; root defaults to the file's directory"""
        path = Path(path)
        return cls(manifest_load(path), root=root if root is not None else path.parent, strict=strict)

    def candidates_build(self, path: str, search_path: Sequence[str]) -> List[str]:
        """
        Manifest keys to try for a reference, in order

        A site-root reference ("/img/a.png") is tried as a bare key first. A
        relative one is only tried against the search directories, or as a
        bare key when there are none.
        """
        relative = path.lstrip("/")
        bare = posixpath.normpath(relative)
        candidates = [bare] if path.startswith("/") or not search_path else []

        for directory in search_path:
            joined = posixpath.normpath(posixpath.join(path_posix(directory), relative))
            if self.root and joined.startswith(self.root.rstrip("/") + "/"):
                joined = joined[len(self.root.rstrip("/")) + 1:]
            candidates.append(joined)

        return list(dict.fromkeys(candidates))

    def find(self, path: str, search_path: Sequence[str]) -> str:
        """Resolve a reference to its revved path"""
        if not path:
            return path

        candidates = self.candidates_build(path, search_path)
        for candidate in candidates:
            revved = self.manifest.get(candidate)
            if revved is not None:
                return posixpath.join(posixpath.dirname(path), posixpath.basename(revved))

        if self.strict:
            raise AssetNotFoundError(path, candidates)
        LOG(f"No revved version of {path}, left as is", level=3)
        return path
