"""Tests for the Attribute descriptor."""

from pathlib import Path

import pytest

from typeforge.attribute import Attribute
from typeforge.catalog import FileHandleListType
from typeforge.errors import ConstraintViolation
from typeforge.standard import Int
from typeforge.values import Collection


class Job:
    """Host class using typed attributes."""
    files = Attribute("FileHandleList", coerce=True)
    inputs = Attribute(FileHandleListType)
    retries = Attribute(Int, default=3)
    tags = Attribute("Collection[Str]", coerce=True, default_factory=list)


class TestAttribute:
    """Tests for Attribute."""

    def test_coerce_on_assignment(self):
        """Test coercion runs before validation when enabled."""
        job = Job()
        job.files = ["a.txt", "b.txt"]
        assert job.files == Collection(Path("a.txt"), Path("b.txt"))

    def test_no_coercion_when_disabled(self):
        """Test values must already conform without coerce."""
        job = Job()
        with pytest.raises(ConstraintViolation, match="FileHandleList"):
            job.inputs = ["a.txt"]
        job.inputs = Collection(Path("a.txt"))
        assert job.inputs == Collection(Path("a.txt"))

    def test_failed_coercion_raises(self):
        """Test a value no rule can fix is rejected."""
        job = Job()
        with pytest.raises(ConstraintViolation):
            job.files = [1, 2]

    def test_default(self):
        job = Job()
        assert job.retries == 3
        job.retries = 5
        assert job.retries == 5

    def test_default_factory_is_coerced(self):
        """Test defaults go through the same processing as assignments."""
        job = Job()
        assert job.tags == Collection()
        job.tags = ["a", "b"]
        assert job.tags == Collection("a", "b")

    def test_missing_value_raises(self):
        job = Job()
        with pytest.raises(AttributeError, match="'files' is not set"):
            job.files

    def test_invalid_assignment_keeps_old_value(self):
        job = Job()
        job.retries = 4
        with pytest.raises(ConstraintViolation):
            job.retries = "4"
        assert job.retries == 4

    def test_class_access_returns_descriptor(self):
        assert isinstance(Job.files, Attribute)
        assert Job.files.isa is FileHandleListType
        assert Job.files.name == "files"

    def test_default_and_factory_conflict(self):
        with pytest.raises(ValueError, match="both default and default_factory"):
            Attribute(Int, default=1, default_factory=int)

    def test_required_attribute_must_be_assigned(self):
        class Upload:
            target = Attribute("FileHandle", coerce=True, required=True)

        upload = Upload()
        with pytest.raises(AttributeError, match="'target' is required"):
            upload.target
        upload.target = "out.bin"
        assert upload.target == Path("out.bin")
        assert Upload.target.required

    @pytest.mark.parametrize("kwargs", [{"default": 1}, {"default_factory": int}])
    def test_required_with_default_conflict(self, kwargs):
        with pytest.raises(ValueError, match="required attribute cannot have a default"):
            Attribute(Int, required=True, **kwargs)
