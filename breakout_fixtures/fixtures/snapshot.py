"""Tree snapshots, link reports and manifests for generated fixtures."""

from __future__ import annotations

import hashlib
import json
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from breakout_fixtures.fixtures.models import AliasSpec, GenerationReport, ScenarioSpec
from breakout_fixtures.fixtures.paths import is_outside, resolve_lexically


@dataclass(frozen=True)
class TreeEntry:
    """One directory, file or symbolic link found under an output root."""

    path: str
    kind: str
    target: str | None = None
    digest: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize the entry."""
        return {"path": self.path, "kind": self.kind, "target": self.target, "digest": self.digest}


@dataclass(frozen=True)
class LinkReport:
    """A symbolic link with its lexical resolution relative to its owning scenario."""

    path: str
    target: str
    resolved: Path
    scenario: str | None
    escapes: bool | None

    def to_dict(self) -> dict[str, object]:
        """Serialize the report row."""
        return {
            "path": self.path,
            "target": self.target,
            "resolved": str(self.resolved),
            "scenario": self.scenario,
            "escapes": self.escapes,
        }


def snapshot_tree(output_root: Path) -> list[TreeEntry]:
    """Walk output_root without following links and return a sorted entry list."""
    entries: list[TreeEntry] = []
    for root, dirnames, filenames in os.walk(output_root, followlinks=False):
        dirnames.sort()
        current = Path(root)
        for name in sorted([*dirnames, *filenames]):
            path = current / name
            relative = path.relative_to(output_root).as_posix()
            if path.is_symlink():
                entries.append(TreeEntry(relative, "symlink", target=os.readlink(path)))
            elif path.is_dir():
                entries.append(TreeEntry(relative, "dir"))
            else:
                entries.append(TreeEntry(relative, "file", digest=_hash_file(path)))
    return sorted(entries, key=lambda entry: entry.path)


def tree_fingerprint(entries: Sequence[TreeEntry]) -> str:
    """Compute a deterministic hash over entry names, kinds, link targets and digests."""
    digest = hashlib.sha256()
    for entry in sorted(entries, key=lambda item: item.path):
        digest.update(f"{entry.path}:{entry.kind}:{entry.target}:{entry.digest}\n".encode())
    return digest.hexdigest()


def link_report(output_root: Path) -> list[LinkReport]:
    """Report every symlink under output_root and whether it escapes its scenario.

    Links directly under the output root are aliases; they belong to no
    scenario and are reported with escapes set to None.
    """
    base = Path(os.path.abspath(output_root))
    rows: list[LinkReport] = []
    for entry in snapshot_tree(base):
        if entry.kind != "symlink" or entry.target is None:
            continue
        parts = entry.path.split("/")
        link_path = base.joinpath(*parts)
        resolved = resolve_lexically(link_path, entry.target)
        if len(parts) == 1:
            rows.append(LinkReport(entry.path, entry.target, resolved, None, None))
            continue
        scenario = parts[0]
        escapes = is_outside(base / scenario, resolved)
        rows.append(LinkReport(entry.path, entry.target, resolved, scenario, escapes))
    return rows


def build_manifest(
    output_root: Path,
    entries: Sequence[ScenarioSpec | AliasSpec],
    report: GenerationReport | None = None,
) -> dict[str, object]:
    """Build a JSON-ready manifest describing the catalog and what is on disk."""
    tree = snapshot_tree(output_root)
    return {
        "output_root": str(Path(os.path.abspath(output_root))),
        "fingerprint": tree_fingerprint(tree),
        "scenarios": [entry.to_dict() for entry in entries],
        "links": [row.to_dict() for row in link_report(output_root)],
        "report": report.to_dict() if report is not None else None,
    }


def write_manifest(path: Path, manifest: dict[str, object]) -> Path:
    """Write a manifest as indented JSON and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return path


def _hash_file(path: Path) -> str:
    """Hash file contents using SHA-256."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(8192), b""):
            digest.update(chunk)
    return digest.hexdigest()
