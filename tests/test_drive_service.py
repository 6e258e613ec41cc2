"""Tests for DriveService, DriveListing filtering and Breadcrumb navigation."""

import pytest

from filedrive.exceptions import FolderNotFoundError
from filedrive.schemas.drive import BreadcrumbSegment
from filedrive.services.drive_service import (
    ROOT_NAME,
    Breadcrumb,
    DriveListing,
    DriveService,
    matches_query,
)


@pytest.fixture()
def drive(db, store):
    return DriveService(db, store, cascade=False)


@pytest.fixture()
def docs_with_report(drive, user):
    """Root holds folder "Docs"; "Docs" holds report.pdf."""
    docs = drive.folders.create(user.user_id, "Docs")
    report = drive.files.create_from_upload(
        user.user_id, docs.folder_id, b"%PDF-1.7", "report.pdf", "application/pdf"
    )
    return docs, report


class TestBrowse:

    def test_root_lists_docs_only(self, drive, user, docs_with_report):
        docs, _ = docs_with_report
        listing = drive.browse(user.user_id, None)
        assert [f.folder_id for f in listing.folders] == [docs.folder_id]
        assert listing.files == []

    def test_docs_lists_report(self, drive, user, docs_with_report):
        docs, report = docs_with_report
        listing = drive.browse(user.user_id, docs.folder_id)
        assert listing.folders == []
        assert [f.file_id for f in listing.files] == [report.file_id]

    def test_unknown_folder_is_empty_not_error(self, drive, user):
        listing = drive.browse(user.user_id, "missing")
        assert listing.folders == [] and listing.files == []

    def test_other_owner_sees_nothing(self, drive, user, other_user, docs_with_report):
        docs, _ = docs_with_report
        assert drive.browse(other_user.user_id, docs.folder_id).files == []
        assert drive.browse(other_user.user_id, None).folders == []


class TestBreadcrumbFor:

    def test_root(self, drive, user):
        assert drive.breadcrumb_for(user.user_id, None) == [BreadcrumbSegment(id=None, name=ROOT_NAME)]

    def test_nested_length_is_depth_plus_one(self, drive, user):
        a = drive.folders.create(user.user_id, "A")
        b = drive.folders.create(user.user_id, "B", parent_id=a.folder_id)
        crumb = drive.breadcrumb_for(user.user_id, b.folder_id)
        assert [seg.name for seg in crumb] == [ROOT_NAME, "A", "B"]
        assert crumb[-1].id == b.folder_id

    def test_renamed_folder_shows_new_name(self, drive, user, docs_with_report):
        docs, _ = docs_with_report
        drive.folders.rename(user.user_id, docs.folder_id, "Papers")
        assert [seg.name for seg in drive.breadcrumb_for(user.user_id, docs.folder_id)] == [ROOT_NAME, "Papers"]

    def test_other_owner_is_not_found(self, drive, other_user, docs_with_report):
        docs, _ = docs_with_report
        with pytest.raises(FolderNotFoundError):
            drive.breadcrumb_for(other_user.user_id, docs.folder_id)


class TestSearch:

    def test_case_insensitive_substring(self, drive, user, docs_with_report):
        docs, report = docs_with_report
        drive.files.create_from_upload(user.user_id, docs.folder_id, b"x", "notes.txt", "text/plain")
        result = drive.search(user.user_id, docs.folder_id, "REP")
        assert [f.file_id for f in result.files] == [report.file_id]

    def test_empty_query_matches_everything(self, drive, user, docs_with_report):
        result = drive.search(user.user_id, None, "")
        assert len(result.folders) == 1

    def test_search_does_not_descend(self, drive, user, docs_with_report):
        result = drive.search(user.user_id, None, "report")
        assert result.files == [] and result.folders == []

    def test_matches_query(self):
        assert matches_query("Quarterly Report.pdf", "report")
        assert matches_query("anything", None)
        assert not matches_query(None, "x")


class TestRemoveFolder:

    def test_non_cascading_delete_keeps_files_reachable(self, drive, user, docs_with_report):
        docs, report = docs_with_report
        folder_id, file_id = docs.folder_id, report.file_id
        before = drive.browse(user.user_id, None)

        pruned = drive.remove_folder(user.user_id, folder_id, listing=before)

        assert pruned.folders == []
        assert drive.browse(user.user_id, None).folders == []
        assert [f.file_id for f in drive.browse(user.user_id, folder_id).files] == [file_id]

    def test_cascading_delete_removes_files(self, drive, store, user, docs_with_report):
        docs, report = docs_with_report
        folder_id, locator = docs.folder_id, report.remote_locator
        assert drive.remove_folder(user.user_id, folder_id, cascade=True) is None
        assert drive.browse(user.user_id, folder_id).files == []
        assert locator not in store.blobs

    def test_cascade_setting_applies_by_default(self, db, store, user):
        drive = DriveService(db, store, cascade=True)
        docs = drive.folders.create(user.user_id, "Docs")
        drive.files.create_from_upload(user.user_id, docs.folder_id, b"x", "a.txt", "text/plain")
        folder_id = docs.folder_id
        drive.remove_folder(user.user_id, folder_id)
        assert drive.browse(user.user_id, folder_id).files == []


class TestDriveListing:

    def test_without_folder_drops_folder_and_its_files(self, drive, user, docs_with_report):
        docs, report = docs_with_report
        listing = DriveListing(folders=[docs], files=[report])
        pruned = listing.without_folder(docs.folder_id)
        assert pruned.folders == [] and pruned.files == []
        assert listing.folders == [docs]

    def test_filtered_keeps_original(self, drive, user, docs_with_report):
        docs, report = docs_with_report
        listing = DriveListing(folders=[docs], files=[report])
        assert listing.filtered("zzz").files == []
        assert listing.files == [report]


class TestBreadcrumb:

    def test_starts_at_root(self):
        crumb = Breadcrumb()
        assert crumb.current_id is None
        assert crumb.segments[0].name == ROOT_NAME

    def test_enter_back_go_to(self):
        crumb = Breadcrumb().enter("a", "A").enter("b", "B")
        assert crumb.current_id == "b"
        assert crumb.back().current_id == "a"
        assert crumb.go_to(0).current_id is None
        assert Breadcrumb().back() == Breadcrumb()

    def test_go_to_out_of_range(self):
        with pytest.raises(IndexError):
            Breadcrumb().go_to(3)

    def test_rename_updates_matching_segment(self):
        crumb = Breadcrumb().enter("a", "A").rename("a", "Renamed")
        assert [seg.name for seg in crumb.segments] == [ROOT_NAME, "Renamed"]

    def test_drop_resets_when_folder_on_path(self):
        crumb = Breadcrumb().enter("a", "A").enter("b", "B")
        assert crumb.drop("a") == Breadcrumb()
        assert crumb.drop("zzz") is crumb

    def test_from_segments(self, drive, user):
        a = drive.folders.create(user.user_id, "A")
        crumb = Breadcrumb.from_segments(drive.breadcrumb_for(user.user_id, a.folder_id))
        assert crumb.current_id == a.folder_id
        assert Breadcrumb.from_segments([]) == Breadcrumb()
