from styleguard.utils import iter_code_files, resolve_inputs


def test_iter_code_files_filters_by_extension(tmp_path):
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "B.swift").write_text("", encoding="utf-8")
    (tmp_path / "A.swift").write_text("", encoding="utf-8")
    (tmp_path / "README.md").write_text("", encoding="utf-8")

    names = [path.name for path in iter_code_files([str(tmp_path)])]

    assert names == ["A.swift", "B.swift"]


def test_resolve_inputs_expands_excludes_and_dedupes(tmp_path):
    keep = tmp_path / "Keep.swift"
    generated = tmp_path / "Model+Generated.swift"
    keep.write_text("", encoding="utf-8")
    generated.write_text("", encoding="utf-8")

    resolved = resolve_inputs(
        [str(tmp_path), str(keep), str(tmp_path / "Missing.swift")],
        exclude=["*Generated*"],
    )

    assert resolved == [keep, tmp_path / "Missing.swift"]
