"""End-to-end pipeline: utterance in, UI callbacks and speech out."""
from voice_ordering.api_pipeline import VoicePipeline
from voice_ordering.dispatcher import DispatchMode, OpenOrder, SwitchCategory
from voice_ordering.normalizer import Utterance
from voice_ordering.responder import RecordingResponder


def make_pipeline(menu, **kwargs):
    searches, commands = [], []
    speaker = RecordingResponder()
    pipeline = VoicePipeline(
        menu,
        speaker=speaker,
        on_search=searches.append,
        on_command=commands.append,
        **kwargs,
    )
    return pipeline, searches, commands, speaker


def test_order_reaches_command_hook(menu):
    pipeline, searches, commands, speaker = make_pipeline(menu)
    result = pipeline.process_text("Two grande Spanish latte, please.")

    assert searches == []
    assert len(commands) == 1
    assert isinstance(commands[0], OpenOrder)
    assert result["action"]["kind"] == "open_order"
    assert result["parsing"]["quantity"] == 2
    assert speaker.take() == result["speech"]


def test_category_switch(menu):
    pipeline, _, commands, _ = make_pipeline(menu)
    result = pipeline.process_utterance(Utterance("show me the meals"))
    assert commands == [SwitchCategory(category="Meals")]
    assert result["classification"]["branch"] == "navigation"
    assert result["parsing"] is None


def test_plain_search_reaches_search_hook(menu):
    pipeline, searches, commands, speaker = make_pipeline(menu, mode=DispatchMode.VOICE_SEARCH)
    result = pipeline.process_text("chocolate")
    assert searches == ["chocolate"]
    assert commands == []
    assert result["speech"] is None
    assert speaker.take() is None


def test_not_found_searches_raw_term(menu):
    pipeline, searches, _, _ = make_pipeline(menu)
    pipeline.process_text("order unicorn frappe")
    assert searches == ["unicorn frappe"]


def test_filipino_locale_answers_in_filipino(menu):
    pipeline, _, _, speaker = make_pipeline(menu, locale="tl-PH")
    pipeline.process_text("patingin ng pagkain")
    assert speaker.take() == "Narito ang Meals para sa iyo."


def test_result_without_hooks(menu):
    pipeline = VoicePipeline(menu)
    result = pipeline.process_text("order venti americano")
    assert result["success"]
    assert result["transcription"] == {"text": "order venti americano", "locale": "en-US"}
