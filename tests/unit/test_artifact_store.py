"""Unit tests for artifact allocation."""

import pytest

from webarchiver.utils.artifact_store import Artifact, ArtifactStore


@pytest.mark.unit
def test_create_with_extension(tmp_path):
    store = ArtifactStore(tmp_path / "nested" / "artifacts")
    artifact = store.create_with_extension(".pdf")

    assert artifact.exists
    assert artifact.size == 0
    assert artifact.path.suffix == ".pdf"
    assert artifact.path.parent == (tmp_path / "nested" / "artifacts").resolve()
    assert artifact.filename == artifact.path.name
    assert artifact.mime_type == "application/pdf"


@pytest.mark.unit
def test_extension_without_dot(store):
    assert store.create_with_extension("jar").path.suffix == ".jar"


@pytest.mark.unit
def test_each_artifact_is_distinct(store):
    first = store.create_with_extension(".pdf")
    second = store.create_with_extension(".pdf")

    assert first.path != second.path


@pytest.mark.unit
def test_artifact_size_of_missing_file(tmp_path):
    artifact = Artifact(path=tmp_path / "gone.pdf", filename="report.pdf")

    assert not artifact.exists
    assert artifact.size == 0
    assert artifact.filename == "report.pdf"
