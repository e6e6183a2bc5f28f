"""Tests for the compact report renderer and tag abbreviation."""

from datetime import date, datetime

import pytest

from omnifocus_mcp import (
    Database,
    Folder,
    Project,
    Task,
    _compute_tag_prefixes,
    _format_compact_report,
    _parse_database,
)
from omnifocus_mcp.utils.formatters import REPORT_LEGEND, _format_compact_date, _format_duration

TODAY = date(2025, 3, 1)


def body(report: str) -> list[str]:
    """Report lines after the header and legend."""
    header = f"# OMNIFOCUS [{TODAY.isoformat()}]\n\n{REPORT_LEGEND}\n"
    assert report.startswith(header)
    return report[len(header) :].splitlines()


# ============================================================================
# Tag Prefixes
# ============================================================================


class TestComputeTagPrefixes:
    """Tests for minimum unique tag prefixes."""

    def test_mixed_lengths(self):
        assert _compute_tag_prefixes(["urgent", "us", "unique"]) == {"urgent": "urg", "us": "us", "unique": "uni"}

    def test_empty(self):
        assert _compute_tag_prefixes([]) == {}

    def test_single_tag(self):
        assert _compute_tag_prefixes(["errands"]) == {"errands": "err"}

    def test_short_tag_keeps_full_name(self):
        assert _compute_tag_prefixes(["ab"]) == {"ab": "ab"}

    def test_prefix_of_another_tag(self):
        """A name that prefixes another can never be unique and falls back to itself."""
        prefixes = _compute_tag_prefixes(["work", "working"])
        assert prefixes["work"] == "work"
        assert prefixes["working"] == "worki"

    def test_extends_until_unique(self):
        prefixes = _compute_tag_prefixes(["project", "progress", "prose"])
        assert prefixes == {"progress": "prog", "project": "proj", "prose": "pros"}

    def test_duplicates_ignored(self):
        assert _compute_tag_prefixes(["home", "home"]) == {"home": "hom"}

    def test_order_independent(self):
        names = ["waiting", "work", "wait", "working", "w", "errand"]
        assert _compute_tag_prefixes(names) == _compute_tag_prefixes(list(reversed(names)))
        assert _compute_tag_prefixes(names) == _compute_tag_prefixes(names)

    def test_abbreviations_are_unique(self):
        names = ["alpha", "alpine", "alps", "beta", "bet", "gamma", "gam"]
        prefixes = _compute_tag_prefixes(names)
        for name, abbreviation in prefixes.items():
            assert len(abbreviation) >= min(3, len(name))
            assert name.startswith(abbreviation)
            if abbreviation != name:
                assert not any(other != name and other.startswith(abbreviation) for other in names)


# ============================================================================
# Small Formatters
# ============================================================================


class TestSmallFormatters:
    """Tests for date and duration annotations."""

    def test_duration_minutes(self):
        assert _format_duration(45) == "(45m)"

    def test_duration_hours_round_down(self):
        assert _format_duration(125) == "(2h)"
        assert _format_duration(60) == "(1h)"

    def test_duration_absent(self):
        assert _format_duration(0) == ""
        assert _format_duration(None) == ""

    def test_compact_date_no_padding(self):
        assert _format_compact_date(datetime(2025, 3, 7, 9, 30)) == "3/7"
        assert _format_compact_date(datetime(2025, 12, 25)) == "12/25"

    def test_compact_date_absent(self):
        assert _format_compact_date(None) == ""


# ============================================================================
# Report Rendering
# ============================================================================


class TestFormatCompactReport:
    """Tests for the hierarchical report."""

    def test_header_and_legend(self):
        report = _format_compact_report(Database(), today=TODAY)
        assert report.startswith("# OMNIFOCUS [2025-03-01]\n\nFORMAT LEGEND:\n")
        assert "F: Folder | P: Project | •: Task | 🚩: Flagged\n" in report
        assert "Dates: [M/D] | Duration: (30m) or (2h) | Tags: <tag1,tag2>\n" in report
        assert "Status: #next #avail #block #due #over #compl #drop\n\n" in report
        assert body(report) == []

    def test_sample_export(self, sample_export):
        database = _parse_database(sample_export)
        report = _format_compact_report(database, today=TODAY)
        assert body(report) == [
            "F: Writing",
            "   P: Book",
            "      • 🚩 Draft outline [DUE:3/15] (45m) <urg,us> #avail",
            "         • Research sources [defer:3/2] (2h) <uni> #next",
            "P: Someday 🚩 [OnHold] [DUE:4/1]",
        ]

    def test_sample_export_show_completed(self, sample_export):
        database = _parse_database(sample_export)
        lines = body(_format_compact_report(database, hide_completed=False, today=TODAY))
        assert "      • Send invoice #compl" in lines
        assert lines.index("      • Send invoice #compl") > lines.index(
            "         • Research sources [defer:3/2] (2h) <uni> #next"
        )

    def test_on_hold_project_without_tasks(self):
        database = Database(
            projects={"p": Project(id="p", name="Garden", status="OnHold", due_date=datetime(2025, 5, 4, 12))}
        )
        assert body(_format_compact_report(database, today=TODAY)) == ["P: Garden [OnHold] [DUE:5/4]"]

    def test_nested_folder_project_task(self):
        database = Database(
            tasks=[
                Task(
                    id="t",
                    name="Buy stamps",
                    flagged=True,
                    task_status="Next",
                    project_id="p",
                    tag_names=["errands", "phone"],
                )
            ],
            projects={"p": Project(id="p", name="Post office", folder_id="f2")},
            folders={
                "f1": Folder(id="f1", name="Home", subfolder_ids=["f2"]),
                "f2": Folder(id="f2", name="Chores", parent_folder_id="f1", project_ids=["p"]),
            },
        )
        assert body(_format_compact_report(database, today=TODAY)) == [
            "F: Home",
            "   F: Chores",
            "      P: Post office",
            "         • 🚩 Buy stamps <err,pho> #next",
        ]

    def test_subfolders_before_projects(self):
        database = Database(
            projects={
                "p1": Project(id="p1", name="Top project", folder_id="f1"),
                "p2": Project(id="p2", name="Inner project", folder_id="f2"),
            },
            folders={
                "f1": Folder(id="f1", name="Outer", subfolder_ids=["f2"], project_ids=["p1"]),
                "f2": Folder(id="f2", name="Inner", parent_folder_id="f1", project_ids=["p2"]),
            },
        )
        assert body(_format_compact_report(database, today=TODAY)) == [
            "F: Outer",
            "   F: Inner",
            "      P: Inner project",
            "   P: Top project",
        ]

    def test_status_annotations(self):
        statuses = ["Next", "Available", "Blocked", "DueSoon", "Overdue", "Completed", "Dropped", "Mystery"]
        database = Database(
            tasks=[Task(id=str(i), name=s, task_status=s, project_id="p") for i, s in enumerate(statuses)],
            projects={"p": Project(id="p", name="All")},
        )
        lines = body(_format_compact_report(database, hide_completed=False, today=TODAY))
        assert lines == [
            "P: All",
            "   • Next #next",
            "   • Available #avail",
            "   • Blocked #block",
            "   • DueSoon #due",
            "   • Overdue #over",
            "   • Completed #compl",
            "   • Dropped #drop",
            "   • Mystery",
        ]

    def test_done_and_dropped_projects(self):
        database = Database(
            projects={
                "p1": Project(id="p1", name="Finished", status="Done"),
                "p2": Project(id="p2", name="Abandoned", status="Dropped"),
                "p3": Project(id="p3", name="Running", status="Active"),
            }
        )
        assert body(_format_compact_report(database, today=TODAY)) == ["P: Running"]
        assert body(_format_compact_report(database, hide_completed=False, today=TODAY)) == [
            "P: Finished",
            "P: Abandoned [Dropped]",
            "P: Running",
        ]

    def test_hidden_task_hides_subtree(self):
        database = Database(
            tasks=[
                Task(id="a", name="Parent", task_status="Completed", project_id="p", child_ids=["b"]),
                Task(id="b", name="Child", task_status="Available", project_id="p", parent_task_id="a"),
            ],
            projects={"p": Project(id="p", name="Proj")},
        )
        assert body(_format_compact_report(database, today=TODAY)) == ["P: Proj"]

    def test_subtask_not_duplicated_under_project(self):
        database = Database(
            tasks=[
                Task(id="a", name="Parent", project_id="p", child_ids=["b"]),
                Task(id="b", name="Child", project_id="p", parent_task_id="a"),
            ],
            projects={"p": Project(id="p", name="Proj")},
        )
        lines = body(_format_compact_report(database, today=TODAY))
        assert lines == ["P: Proj", "   • Parent #avail", "      • Child #avail"]

    def test_child_rendered_regardless_of_project(self):
        database = Database(
            tasks=[
                Task(id="a", name="Parent", project_id="p", child_ids=["b"]),
                Task(id="b", name="Elsewhere", project_id="other", parent_task_id="a"),
            ],
            projects={"p": Project(id="p", name="Proj")},
        )
        assert "      • Elsewhere #avail" in body(_format_compact_report(database, today=TODAY))

    def test_dangling_references_skipped(self):
        database = Database(
            tasks=[Task(id="a", name="Parent", project_id="p", child_ids=["ghost"])],
            projects={"p": Project(id="p", name="Orphan", folder_id="no-such-folder")},
            folders={
                "f": Folder(id="f", name="Lonely", parent_folder_id="gone", project_ids=["nope"], subfolder_ids=["x"])
            },
        )
        assert body(_format_compact_report(database, today=TODAY)) == [
            "F: Lonely",
            "P: Orphan",
            "   • Parent #avail",
        ]

    def test_cycles_terminate(self):
        database = Database(
            tasks=[
                Task(id="a", name="A", project_id="p", child_ids=["b"]),
                Task(id="b", name="B", project_id="p", parent_task_id="a", child_ids=["a", "b"]),
            ],
            projects={"p": Project(id="p", name="Loop", folder_id="f1")},
            folders={
                "f1": Folder(id="f1", name="Root", subfolder_ids=["f1"], project_ids=["p", "p"]),
            },
        )
        assert body(_format_compact_report(database, today=TODAY)) == [
            "F: Root",
            "   P: Loop",
            "      • A #avail",
            "         • B #avail",
        ]

    def test_deterministic(self, sample_export):
        database = _parse_database(sample_export)
        first = _format_compact_report(database, hide_completed=False, today=TODAY)
        second = _format_compact_report(database, hide_completed=False, today=TODAY)
        assert first == second

    @pytest.mark.parametrize("hide_recurring_duplicates", [True, False])
    def test_recurring_duplicates_option_is_inert(self, sample_export, hide_recurring_duplicates):
        database = _parse_database(sample_export)
        expected = _format_compact_report(database, today=TODAY)
        actual = _format_compact_report(
            database, hide_recurring_duplicates=hide_recurring_duplicates, today=TODAY
        )
        assert actual == expected

    def test_show_completed_renders_each_item_once(self):
        database = Database(
            tasks=[
                Task(id="a", name="Alpha", task_status="Dropped", project_id="p", child_ids=["b", "c"]),
                Task(id="b", name="Bravo", task_status="Completed", project_id="p", parent_task_id="a"),
                Task(id="c", name="Charlie", project_id="p", parent_task_id="a", child_ids=["b"]),
                Task(id="d", name="Delta", task_status="Overdue", project_id="q"),
            ],
            projects={
                "p": Project(id="p", name="First", status="Done", folder_id="f"),
                "q": Project(id="q", name="Second", status="Dropped"),
            },
            folders={"f": Folder(id="f", name="Folder", project_ids=["p"])},
        )
        report = _format_compact_report(database, hide_completed=False, today=TODAY)
        for name in ["Alpha", "Bravo", "Charlie", "Delta", "First", "Second", "Folder"]:
            assert sum(1 for line in body(report) if f" {name}" in line) == 1

        hidden = body(_format_compact_report(database, hide_completed=True, today=TODAY))
        assert hidden == ["F: Folder"]

    def test_unknown_tag_abbreviated(self, sample_export):
        sample_export["tasks"][3]["projectId"] = "p2"
        database = _parse_database(sample_export)
        lines = body(_format_compact_report(database, today=TODAY))
        assert "   • Buy milk <Unk> #avail" in lines

    def test_task_with_missing_parent_renders_under_project(self):
        database = Database(
            tasks=[
                Task(id="a", name="Kept", project_id="p"),
                Task(id="c", name="Orphan child", project_id="p", parent_task_id="gone"),
            ],
            projects={"p": Project(id="p", name="Proj")},
        )
        assert body(_format_compact_report(database, today=TODAY)) == [
            "P: Proj",
            "   • Kept #avail",
            "   • Orphan child #avail",
        ]
