"""Test board rendering (pure functions, no I/O)"""
from taskboard.client.render import (
    EMPTY_PLACEHOLDER,
    compute_stats,
    format_status,
    render_board,
)
from taskboard.client.state import Banner, BoardState


def make_task(task_id, title="Task", status="pending", description="", created="2024-01-01T10:00:00Z", updated=None):
    return {
        "id": task_id,
        "title": title,
        "description": description,
        "status": status,
        "createdAt": created,
        "updatedAt": updated or created,
    }


def test_empty_board():
    view = render_board(BoardState())

    assert EMPTY_PLACEHOLDER in view.list_html
    assert "task-item" not in view.list_html
    assert view.summary == "0 tasks, 0 pending, 0 in progress, 0 completed"


def test_stats_counts_each_status():
    tasks = [
        make_task("a", status="pending"),
        make_task("b", status="in-progress"),
        make_task("c", status="completed"),
        make_task("d", status="completed"),
    ]
    stats = compute_stats(tasks)

    assert stats.count_text == "4 tasks"
    assert stats.breakdown_text == "1 pending, 1 in progress, 2 completed"


def test_single_task_count_is_singular():
    view = render_board(BoardState(tasks=[make_task("a")]))
    assert view.task_count == "1 task"


def test_renders_tasks_in_state_order():
    state = BoardState(tasks=[make_task("b", title="Second"), make_task("a", title="First")])
    html = render_board(state).list_html

    assert html.index("Second") < html.index("First")
    assert 'data-id="b"' in html


def test_title_and_description_are_escaped():
    state = BoardState(tasks=[make_task(
        "x",
        title="<script>alert(1)</script>",
        description='"quoted" & <b>bold</b>',
    )])
    html = render_board(state).list_html

    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert "&amp;" in html


def test_description_block_only_when_present():
    html = render_board(BoardState(tasks=[make_task("x")])).list_html
    assert "task-description" not in html

    html = render_board(BoardState(tasks=[make_task("x", description="details")])).list_html
    assert '<div class="task-description">details</div>' in html


def test_updated_date_only_when_changed():
    unchanged = render_board(BoardState(tasks=[make_task("x")])).list_html
    assert "Updated:" not in unchanged

    changed = render_board(BoardState(tasks=[
        make_task("x", updated="2024-01-02T10:00:00Z"),
    ])).list_html
    assert "Updated:" in changed


def test_status_label():
    assert format_status("in-progress") == "In Progress"
    assert format_status("pending") == "Pending"

    html = render_board(BoardState(tasks=[make_task("x", status="in-progress")])).list_html
    assert 'class="task-status status-in-progress">In Progress<' in html


def test_edit_panel_active_only_for_open_task():
    state = BoardState(tasks=[make_task("a"), make_task("b")], editing_id="b")
    html = render_board(state).list_html

    assert 'class="edit-form active" id="edit-b"' in html
    assert 'class="edit-form" id="edit-a"' in html


def test_removing_marker():
    state = BoardState(tasks=[make_task("a")], removing={"a"})
    assert 'class="task-item removing"' in render_board(state).list_html


def test_load_error_replaces_list():
    state = BoardState(tasks=[make_task("a")], load_error="Connection refused")
    html = render_board(state).list_html

    assert "Failed to load tasks: Connection refused" in html
    assert "task-item" not in html


def test_connection_indicator():
    assert render_board(BoardState(connected=True)).connection_text == "Connected to database"
    view = render_board(BoardState(connected=False))
    assert view.connection_text == "Connection Error"
    assert view.connected is False


def test_banners():
    state = BoardState(banners=[
        Banner(id=1, text="Task created successfully!", kind="success"),
        Banner(id=2, text="<oops>", kind="error", fading=True),
    ])
    html = render_board(state).banners_html

    assert '<div class="success-message" data-banner="1">Task created successfully!</div>' in html
    assert 'class="error-message fade-out"' in html
    assert "&lt;oops&gt;" in html


def test_render_does_not_mutate_state():
    state = BoardState(tasks=[make_task("a")], editing_id="a")
    render_board(state)

    assert state.tasks == [make_task("a")]
    assert state.editing_id == "a"


def test_create_button_disabled_while_creating():
    view = render_board(BoardState(creating=True))
    assert view.create_disabled is True
    assert view.create_label == ""
    assert render_board(BoardState()).create_label == "Create Task"
