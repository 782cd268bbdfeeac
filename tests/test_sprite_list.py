from gfckit.sprite_list import SpriteList, deleted


class Item:
    def __init__(self, name, gone=False):
        self.name = name
        self.gone = gone
        self.log = []

    def is_deleted(self):
        return self.gone

    def touch(self, *args):
        self.log.append(args)


def test_deleted_reads_flag():
    assert deleted(Item("a", gone=True)) is True
    assert deleted(Item("b")) is False


def test_delete_if_keeps_order_of_survivors():
    items = [Item("a"), Item("b", True), Item("c"), Item("d", True)]
    sprites = SpriteList(items)
    removed = sprites.delete_if(deleted)
    assert [i.name for i in sprites] == ["a", "c"]
    assert [i.name for i in removed] == ["b", "d"]


def test_delete_if_calls_predicate_once_per_item():
    calls = []
    sprites = SpriteList([Item("a"), Item("b")])

    def predicate(item):
        calls.append(item.name)
        return item.name == "a"

    sprites.delete_if(predicate)
    assert calls == ["a", "b"]
    assert [i.name for i in sprites] == ["b"]


def test_for_each_with_function_and_no_args():
    items = [Item("a"), Item("b")]
    SpriteList(items).for_each(Item.touch)
    assert [i.log for i in items] == [[()], [()]]


def test_for_each_passes_argument():
    items = [Item("a"), Item("b")]
    SpriteList(items).for_each(Item.touch, 1234)
    assert all(i.log == [(1234,)] for i in items)


def test_for_each_with_method_name():
    items = [Item("a")]
    SpriteList(items).for_each("touch", "x", "y")
    assert items[0].log == [("x", "y")]


def test_delete_all_empties():
    sprites = SpriteList([Item("a"), Item("b")])
    sprites.delete_all()
    assert len(sprites) == 0