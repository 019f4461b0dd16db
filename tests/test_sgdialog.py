import pytest

from sgrelay.sgdialog import (
    BytesStore,
    Dialog,
    DialogDTO,
    DialogFormatError,
    FileStore,
    ItemType,
    QuestItem,
    crc16,
)


@pytest.fixture
def dialog():
    d = Dialog(BytesStore())
    d.create()
    return d


def test_crc16_empty_is_initial_value():
    assert crc16(b"") == 0xFFFF


def test_crc16_incremental_matches_whole():
    assert crc16(b"b", crc16(b"a")) == crc16(b"ab")


def test_create_layout(dialog):
    data = bytes(dialog.store.data)
    assert len(data) == 13
    assert data[:11] == bytes([0, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0xFF])
    assert int.from_bytes(data[11:], "little") == crc16(data[:11])


def test_new_dialog_has_no_items(dialog):
    assert dialog.items() == []


def test_add_assigns_sequential_ids(dialog):
    assert dialog.add_item(ItemType.QUESTION, b"why?") == 0
    assert dialog.add_item(ItemType.ANSWER, b"because") == 1
    items = dialog.items()
    assert [(i.item_id, i.item_type, i.data) for i in items] == [
        (0, ItemType.QUESTION, b"why?"),
        (1, ItemType.ANSWER, b"because"),
    ]


def test_read_item(dialog):
    dialog.add_item(ItemType.QUESTION, b"q")
    dialog.add_item(ItemType.SOLUTION, b"sol")
    item = dialog.read_item(1)
    assert item.data == b"sol"
    assert item.size == 3
    assert item.item_type is ItemType.SOLUTION


def test_read_missing_item(dialog):
    dialog.add_item(ItemType.QUESTION, b"q")
    with pytest.raises(KeyError):
        dialog.read_item(7)


def test_read_item_too_large(dialog):
    dialog.add_item(ItemType.QUESTION, b"abcdef")
    with pytest.raises(ValueError):
        dialog.read_item(0, max_size=3)


def test_remove_item(dialog):
    dialog.add_item(ItemType.QUESTION, b"one")
    dialog.add_item(ItemType.ANSWER, b"two")
    dialog.add_item(ItemType.ANSWER, b"three")
    assert dialog.remove_item(1) is True
    assert [i.data for i in dialog.items()] == [b"one", b"three"]


def test_remove_missing_returns_false(dialog):
    dialog.add_item(ItemType.QUESTION, b"one")
    assert dialog.remove_item(5) is False
    assert [i.data for i in dialog.items()] == [b"one"]


def test_ids_follow_maximum_after_removal(dialog):
    dialog.add_item(ItemType.QUESTION, b"a")
    dialog.add_item(ItemType.QUESTION, b"b")
    dialog.remove_item(1)
    assert dialog.add_item(ItemType.QUESTION, b"c") == 1


def test_modify_grows_item_keeps_others(dialog):
    dialog.add_item(ItemType.QUESTION, b"q")
    dialog.add_item(ItemType.ANSWER, b"x" * 300)
    dialog.add_item(ItemType.DIALOG, b"tail" * 100)
    big = bytes(range(256)) * 3
    assert dialog.modify_item(0, ItemType.SOLUTION, big) is True
    items = dialog.items()
    assert [i.item_id for i in items] == [0, 1, 2]
    assert items[0].item_type is ItemType.SOLUTION
    assert items[0].data == big
    assert items[1].data == b"x" * 300
    assert items[2].data == b"tail" * 100


def test_modify_missing_returns_false(dialog):
    assert dialog.modify_item(3, ItemType.ANSWER, b"z") is False


def test_add_invalid_type(dialog):
    with pytest.raises(ValueError):
        dialog.add_item(ItemType.EMPTY, b"x")


def test_corruption_detected(dialog):
    dialog.add_item(ItemType.QUESTION, b"hello")
    dialog.store.data[16] ^= 0x01
    with pytest.raises(DialogFormatError):
        dialog.items()


def test_newer_version_rejected(dialog):
    dialog.store.data[4] = 2
    with pytest.raises(DialogFormatError):
        dialog.items()


def test_empty_store_rejected():
    with pytest.raises(DialogFormatError):
        Dialog(BytesStore()).items()


def test_bytes_store_pads_gap():
    store = BytesStore()
    assert store.write(2, b"x") == 1
    assert store.read(0, 3) == b"\x00\x00x"


def test_file_store_round_trip(tmp_path):
    path = tmp_path / "dialog.bin"
    d = Dialog(FileStore(path))
    d.create()
    d.add_item(ItemType.QUESTION, b"from disk")
    reopened = Dialog(FileStore(path))
    assert reopened.read_item(0).data == b"from disk"


def test_dto_validation():
    with pytest.raises(ValueError):
        DialogDTO("q", ["a"] * 9, [0] * 9)
    with pytest.raises(ValueError):
        DialogDTO("q", ["a", "b"], [1])
    dto = DialogDTO("q", ["a"], [2])
    assert dto.next_act_ids == [2]


def test_quest_item_fields():
    item = QuestItem(file_name="x.dlg", is_valid=True, size=4, first_quest="hi")
    assert (item.file_name, item.is_valid, item.size) == ("x.dlg", True, 4)