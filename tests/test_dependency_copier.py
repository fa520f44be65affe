from __future__ import annotations

from pathlib import Path

import pytest

from core.domain.errors import FileSystemError, InputNotFoundError, InvocationError
from core.domain.models import CopiedArtifact
from core.services.dependency_copier import StagingHooks, list_dependencies, stage_binary
from tests.fakes import FakeLister, ldd_line


def _recording_hooks() -> tuple[StagingHooks, list[CopiedArtifact], list[CopiedArtifact], list[Path]]:
    copied: list[CopiedArtifact] = []
    skipped: list[CopiedArtifact] = []
    missing: list[Path] = []
    return StagingHooks(copied=copied.append, skipped=skipped.append, missing=missing.append), copied, skipped, missing


def test_end_to_end_copies_binary_and_each_dependency(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdftotext", b"binary")
    lib_a = make_file("usr/lib/a.so", b"aaa")
    lib_b = make_file("usr/lib/b.so", b"bbb")
    lister = FakeLister("\tlinux-vdso.so.1 (0x1)\n" + ldd_line(lib_a) + ldd_line(lib_b))
    hooks, copied, _, _ = _recording_hooks()
    dest = tmp_path / "out"

    result = stage_binary(binary, dest, lister=lister, hooks=hooks)

    assert (dest / "bin" / "pdftotext").read_bytes() == b"binary"
    assert (dest / "lib" / "a.so").read_bytes() == b"aaa"
    assert (dest / "lib" / "b.so").read_bytes() == b"bbb"
    assert [(a.source, a.destination) for a in copied] == [
        (binary, dest / "bin" / "pdftotext"),
        (lib_a, dest / "lib" / "a.so"),
        (lib_b, dest / "lib" / "b.so"),
    ]
    assert [a.kind for a in result.artifacts] == ["binary", "library", "library"]
    assert lister.calls == [binary]


def test_binary_without_dependencies_leaves_lib_empty(tmp_path: Path, make_file) -> None:
    binary = make_file("build/static-tool")
    dest = tmp_path / "out"

    result = stage_binary(binary, dest, lister=FakeLister(""))

    assert sorted(p.name for p in (dest / "bin").iterdir()) == ["static-tool"]
    assert (dest / "lib").is_dir()
    assert list((dest / "lib").iterdir()) == []
    assert len(result.copied) == 1


def test_duplicate_paths_yield_one_copy_and_first_sorted_path_wins(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdfinfo")
    first = make_file("opt/lib/libdup.so", b"from opt")
    second = make_file("usr/lib/libdup.so", b"from usr")
    report = ldd_line(second) + ldd_line(first) + ldd_line(second) + ldd_line(first)
    hooks, copied, skipped, _ = _recording_hooks()
    dest = tmp_path / "out"

    stage_binary(binary, dest, lister=FakeLister(report), hooks=hooks)

    assert [p.name for p in (dest / "lib").iterdir()] == ["libdup.so"]
    assert (dest / "lib" / "libdup.so").read_bytes() == b"from opt"
    assert [a.source for a in copied if a.kind == "library"] == [first]
    assert [a.source for a in skipped] == [second]


def test_existing_library_is_never_overwritten(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdftoppm")
    lib = make_file("usr/lib/libpoppler.so.126", b"new build")
    dest = tmp_path / "out"
    existing = dest / "lib" / "libpoppler.so.126"
    existing.parent.mkdir(parents=True)
    existing.write_bytes(b"hand-patched")

    result = stage_binary(binary, dest, lister=FakeLister(ldd_line(lib)))

    assert existing.read_bytes() == b"hand-patched"
    assert [a.destination for a in result.skipped] == [existing]
    assert result.skipped[0].reason == "already present"


def test_rerun_is_idempotent_for_libraries(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdftoppm")
    lib = make_file("usr/lib/liblcms2.so.2", b"lcms")
    dest = tmp_path / "out"
    lister = FakeLister(ldd_line(lib))

    stage_binary(binary, dest, lister=lister)
    second = stage_binary(binary, dest, lister=lister)

    assert [a.kind for a in second.copied] == ["binary"]
    assert [a.source for a in second.skipped] == [lib]


def test_binary_is_overwritten_in_bin(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdftocairo", b"v2")
    dest = tmp_path / "out"
    (dest / "bin").mkdir(parents=True)
    (dest / "bin" / "pdftocairo").write_bytes(b"v1")

    stage_binary(binary, dest, lister=FakeLister(""))

    assert (dest / "bin" / "pdftocairo").read_bytes() == b"v2"


def test_paths_missing_on_disk_are_skipped_silently(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdftotext")
    present = make_file("usr/lib/libjpeg.so.8", b"jpeg")
    ghost = tmp_path / "usr" / "lib" / "libghost.so.1"
    hooks, _, _, missing = _recording_hooks()
    dest = tmp_path / "out"

    result = stage_binary(
        binary,
        dest,
        lister=FakeLister(ldd_line(present) + ldd_line(ghost) + "\tlibnope.so.9 => not found\n"),
        hooks=hooks,
    )

    assert sorted(p.name for p in (dest / "lib").iterdir()) == ["libjpeg.so.8"]
    assert result.missing == [ghost]
    assert missing == [ghost]
    assert result.unresolved == ["libnope.so.9"]


def test_missing_binary_fails_before_dependency_resolution(tmp_path: Path) -> None:
    lister = FakeLister(ldd_line(Path("/usr/lib/a.so")))
    dest = tmp_path / "out"

    with pytest.raises(InputNotFoundError):
        stage_binary(tmp_path / "does-not-exist", dest, lister=lister)

    assert lister.calls == []
    assert not (dest / "lib").exists() or list((dest / "lib").iterdir()) == []


@pytest.mark.parametrize("binary, dest", [(None, "out"), ("", "out"), ("bin/tool", None), ("bin/tool", "")])
def test_missing_arguments_are_invocation_errors(tmp_path: Path, binary, dest) -> None:
    lister = FakeLister("")

    with pytest.raises(InvocationError) as info:
        stage_binary(binary, dest, lister=lister)

    assert info.value.exit_code == 2
    assert lister.calls == []
    assert not (tmp_path / "work" / "out").exists()


def test_destination_that_is_a_file_is_a_filesystem_error(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdftotext")
    blocker = make_file("out", b"not a directory")

    with pytest.raises(FileSystemError):
        stage_binary(binary, blocker, lister=FakeLister(""))


def test_list_dependencies_does_not_touch_the_filesystem(tmp_path: Path, make_file) -> None:
    binary = make_file("build/pdftotext")
    lib = make_file("usr/lib/libfreetype.so.6")

    report = list_dependencies(binary, FakeLister(ldd_line(lib) + ldd_line(lib)))

    assert report.binary == binary
    assert report.paths == [lib]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["build", "usr", "work"]
