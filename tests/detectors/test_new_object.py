"""Tests for the untracked NewObject detector."""

from codebase_archeologist.detectors import UntrackedNewObjectDetector
from codebase_archeologist.models import Category, Severity


class TestUntrackedNewObject:
    def setup_method(self):
        self.detector = UntrackedNewObjectDetector()

    def test_call_without_uproperty(self):
        content = "void UInv::Init()\n{\n    Item = NewObject<UItem>(this);\n}\n"
        hits = self.detector.detect(content, "Source/Inv.cpp")

        assert len(hits) == 1
        assert hits[0].category == Category.UNTRACKED_NEWOBJECT
        assert hits[0].severity == Severity.WARNING
        assert hits[0].line == 3
        assert hits[0].message == "NewObject<UItem> may not be tracked by GC (no nearby UPROPERTY)"

    def test_nearby_uproperty_suppresses(self):
        content = (
            "UPROPERTY()\n"
            "UItem* Item = nullptr;\n"
            "void Init() { Item = NewObject<UItem>(this); }\n"
        )
        assert self.detector.detect(content, "Source/Inv.h") == []

    def test_uproperty_outside_window_does_not_count(self):
        content = "UPROPERTY()\nUItem* Item;\n" + "// spacer\n" * 6 + "Item = NewObject< UItem >(this);\n"
        hits = self.detector.detect(content, "Source/Inv.cpp")
        assert len(hits) == 1
        assert "NewObject<UItem>" in hits[0].message

    def test_context_lines_configurable(self):
        content = "UPROPERTY()\nUItem* Item;\n" + "// spacer\n" * 6 + "Item = NewObject<UItem>(this);\n"
        assert UntrackedNewObjectDetector(context_lines=10).detect(content, "Source/Inv.cpp") == []
