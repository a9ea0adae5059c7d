from renamer.models_fs import RenameResult
from renamer.safety_checks import check_results


def test_clean_batch(photo_dir):
    results = [
        RenameResult(photo_dir / "a.jpg", photo_dir / "img_00.jpg"),
        RenameResult(photo_dir / "notes.txt", photo_dir / "notes.txt"),
    ]
    assert check_results(results) == []


def test_duplicate_destination(photo_dir):
    results = [
        RenameResult(photo_dir / "a.jpg", photo_dir / "same.jpg"),
        RenameResult(photo_dir / "b.jpg", photo_dir / "same.jpg"),
    ]
    warnings = check_results(results)
    assert len(warnings) == 1
    assert "same destination" in warnings[0]


def test_invalid_filename(photo_dir):
    warnings = check_results([RenameResult(photo_dir / "a.jpg", photo_dir / "a?.jpg")])
    assert any("invalid character" in w for w in warnings)


def test_missing_destination_folder(photo_dir):
    warnings = check_results([RenameResult(photo_dir / "a.jpg", photo_dir / "nope" / "a.jpg")])
    assert warnings == [f"Destination folder does not exist: {photo_dir / 'nope'}"]


def test_existing_destination(photo_dir):
    warnings = check_results([RenameResult(photo_dir / "a.jpg", photo_dir / "notes.txt")])
    assert any("already exists" in w for w in warnings)


def test_swap_and_case_change_are_not_overwrites(photo_dir):
    results = [
        RenameResult(photo_dir / "a.jpg", photo_dir / "b.jpg"),
        RenameResult(photo_dir / "b.jpg", photo_dir / "a.jpg"),
        RenameResult(photo_dir / "notes.txt", photo_dir / "NOTES.txt"),
    ]
    assert check_results(results) == []
