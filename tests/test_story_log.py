from samba.models import Story
from samba.session import StoryLog


def _story(n: int) -> Story:
    return Story(id=str(n), timestamp=n, words_used=["a", "b", "c"], pt_story=f"história {n}")


def test_eleven_appends_keep_ten_most_recent() -> None:
    log = StoryLog()
    for n in range(11):
        log.append(_story(n))
    assert len(log) == 10
    assert [s.id for s in log] == [str(n) for n in range(10, 0, -1)]


def test_identical_stories_are_not_deduplicated() -> None:
    log = StoryLog()
    story = _story(1)
    log.append(story)
    log.append(story)
    assert len(log) == 2
