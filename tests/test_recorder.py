import asyncio

import pytest

from conftest import FakeAudioSource
from love_odds.core.errors import RecorderStateError
from love_odds.core.models.input import TextStory
from love_odds.core.recorder import RecorderStatus, StoryDraft, StoryRecorder


@pytest.fixture
def source() -> FakeAudioSource:
    return FakeAudioSource()


@pytest.fixture
def recorder(source) -> StoryRecorder:
    return StoryRecorder(source, tick_interval=0.01)


@pytest.mark.asyncio
async def test_record_and_stop(recorder, source):
    await recorder.start()
    assert recorder.status is RecorderStatus.RECORDING
    assert source.started == 1

    clip = await recorder.stop()

    assert recorder.status is RecorderStatus.STOPPED
    assert clip.data == source.data
    assert clip.mime_type == "audio/webm"
    assert recorder.recording is clip


@pytest.mark.asyncio
async def test_ticker_counts_while_recording(recorder):
    await recorder.start()
    await asyncio.sleep(0.1)
    await recorder.stop()

    elapsed = recorder.duration_seconds
    assert elapsed > 0

    await asyncio.sleep(0.05)
    assert recorder.duration_seconds == elapsed


def test_tick_only_counts_while_recording(recorder):
    recorder.tick()
    assert recorder.duration_seconds == 0

    recorder.status = RecorderStatus.RECORDING
    recorder.tick()
    recorder.tick()
    assert recorder.duration_seconds == 2


@pytest.mark.asyncio
async def test_restart_discards_recording(recorder, source):
    await recorder.start()
    await recorder.restart()

    assert recorder.status is RecorderStatus.IDLE
    assert recorder.recording is None
    assert recorder.duration_seconds == 0
    assert source.aborted == 1


@pytest.mark.asyncio
async def test_reset_after_stop(recorder):
    await recorder.start()
    await recorder.stop()

    recorder.reset()

    assert recorder.status is RecorderStatus.IDLE
    assert recorder.recording is None

    await recorder.start()
    assert recorder.duration_seconds == 0
    await recorder.stop()


@pytest.mark.asyncio
async def test_invalid_transitions(recorder):
    with pytest.raises(RecorderStateError):
        await recorder.stop()
    with pytest.raises(RecorderStateError):
        await recorder.restart()
    with pytest.raises(RecorderStateError):
        recorder.reset()

    await recorder.start()
    with pytest.raises(RecorderStateError):
        await recorder.start()
    with pytest.raises(RecorderStateError):
        recorder.reset()

    await recorder.stop()
    with pytest.raises(RecorderStateError):
        await recorder.start()
    with pytest.raises(RecorderStateError):
        await recorder.restart()


def test_story_draft():
    draft = StoryDraft()
    assert draft.is_empty

    draft.write("   \n")
    assert draft.is_empty
    with pytest.raises(ValueError):
        draft.to_input()

    draft.write("We met on a ferry.")
    assert not draft.is_empty
    assert draft.to_input() == TextStory(content="We met on a ferry.")

    draft.clear()
    assert draft.text == ""
