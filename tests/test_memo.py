"""Tests for memos."""

from signalkit import batch, create_effect, create_memo, create_signal, memo


class TestCreateMemo:
    def test_runs_on_creation(self):
        calls = [0]
        count, _ = create_signal(5)

        def fn():
            calls[0] += 1
            return count() * 2

        doubled = create_memo(fn)
        assert calls[0] == 1
        assert doubled() == 10

    def test_caches_until_dependency_changes(self):
        calls = [0]
        count, set_count = create_signal(5)

        def fn():
            calls[0] += 1
            return count() * 2

        doubled = create_memo(fn)
        doubled()
        doubled()
        doubled()
        assert calls[0] == 1

        set_count(10)
        assert calls[0] == 2
        assert doubled() == 20
        doubled()
        assert calls[0] == 2

    def test_display_name_scenario(self):
        calculations = [0]
        effect_triggers = [0]
        first_name, _ = create_signal("John")
        last_name, set_last_name = create_signal("Smith")
        show_full_name, set_show_full_name = create_signal(True)

        def display():
            calculations[0] += 1
            if not show_full_name():
                return first_name()
            return f"{first_name()} {last_name()}"

        display_name = create_memo(display)

        def render():
            display_name()
            effect_triggers[0] += 1

        create_effect(render)

        set_show_full_name(False)
        assert calculations[0] == 2
        assert effect_triggers[0] == 2
        assert display_name() == "John"

        set_last_name("Legend")  # dropped dependency
        assert calculations[0] == 2

        set_show_full_name(True)
        set_last_name("Legend")
        assert calculations[0] == 4
        assert display_name() == "John Legend"

    def test_chained_memos(self):
        count, set_count = create_signal(3)
        doubled = create_memo(lambda: count() * 2)
        quadrupled = create_memo(lambda: doubled() * 2)
        assert quadrupled() == 12
        set_count(5)
        assert quadrupled() == 20

    def test_propagates_to_effects(self):
        count, set_count = create_signal(5)
        doubled = create_memo(lambda: count() * 2)
        log = []
        create_effect(lambda: log.append(doubled()))
        assert log == [10]
        set_count(10)
        assert log == [10, 20]

    def test_once_per_batch(self):
        memo_runs = [0]
        effect_runs = [0]
        count, set_count = create_signal(0)
        other, set_other = create_signal("")

        def label():
            memo_runs[0] += 1
            return f"[Count] {count()} / [Other] {other()}"

        memoed = create_memo(label)

        def render():
            memoed(), count(), other()
            effect_runs[0] += 1

        create_effect(render)

        def update():
            set_count(1)
            set_other("P")

        batch(update)
        assert memo_runs[0] == 2
        assert effect_runs[0] == 2
        assert memoed() == "[Count] 1 / [Other] P"


class TestMemoDecorator:
    def test_decorator_factory(self):
        count, set_count = create_signal(7)

        @memo
        def doubled():
            return count() * 2

        assert doubled() == 14
        set_count(3)
        assert doubled() == 6
