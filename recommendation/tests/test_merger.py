"""
Tests for the recommendation merger, its fallback and the AI advisor client.
"""

import asyncio
import json

import openai

from recommendation.ai.advisor import AIAdvisor
from recommendation.errors import UpstreamServiceError
from recommendation.logic import StudentProfile, TRACKS, RecommendationMerger, build_fallback, top_tracks
from recommendation.logic.constants import DEFAULT_EXPERT_TAGS


def _merge(advisor, profile_data, email="student@uni.lk"):
    profile = StudentProfile.model_validate(profile_data)
    heuristic_top = top_tracks(profile)
    result = asyncio.run(RecommendationMerger(advisor).merge(profile, heuristic_top, email))
    return result, heuristic_top


def test_advisor_failure_falls_back_to_heuristic_top3(make_advisor, profile_data):
    result, heuristic_top = _merge(make_advisor(error=UpstreamServiceError("timeout")), profile_data)

    assert result.source == "fallback"
    assert result.model == "heuristic-fallback"
    assert len(result.recommendations) == 3
    for rec, expected in zip(result.recommendations, heuristic_top[:3]):
        assert rec.track == expected.track
        assert rec.percentage == expected.percentage
        assert f"{expected.track} {expected.percentage}%" in result.summary
    assert len(result.suggested_expert_tags) >= 5


def test_unexpected_advisor_exception_also_falls_back(make_advisor, profile_data):
    result, _ = _merge(make_advisor(error=RuntimeError("boom")), profile_data)

    assert result.source == "fallback"
    assert len(result.recommendations) == 3


def test_fallback_content_follows_each_track(profile_data):
    heuristic_top = top_tracks(profile_data)

    result = build_fallback(heuristic_top)

    software, it, cs = result.recommendations
    assert "Software Engineer" in software.roles
    assert "Systems Administrator" in it.roles
    assert "Research/Academia" in cs.roles
    assert all(r.learning_ease == "Moderate" for r in result.recommendations)
    assert result.summary.splitlines()[-1] == "Final verdict: choose Software Engineering."
    assert result.suggested_expert_tags == DEFAULT_EXPERT_TAGS


def test_ai_reply_is_used(make_advisor, profile_data, reply):
    advisor = make_advisor(reply=reply)

    result, heuristic_top = _merge(advisor, profile_data)

    assert result.source == "ai"
    assert result.model == "gpt-test"
    assert [r.track for r in result.recommendations] == [
        "Software Engineering", "Information Technology", "Computer Science",
    ]
    assert [r.percentage for r in result.recommendations] == [92, 70, 55]
    assert result.recommendations[2].learning_ease == "Challenging"
    assert result.summary == "Software Engineering is your strongest match."
    assert advisor.calls[0]["heuristic_top"] == heuristic_top
    assert advisor.calls[0]["email"] == "student@uni.lk"


def test_old_score_field_is_renamed(make_advisor, profile_data, reply):
    for rec in reply["recommendations"]:
        rec["score"] = rec.pop("percentage")

    result, _ = _merge(make_advisor(reply=reply), profile_data)

    assert result.source == "ai"
    assert [r.percentage for r in result.recommendations] == [92, 70, 55]


def test_reply_is_normalized(make_advisor, profile_data, reply):
    reply["recommendations"][0].update(percentage=140, learningEase="Trivial", roles="Software Engineer")
    reply["recommendations"][1].pop("reason")
    reply["recommendations"].append(dict(reply["recommendations"][2], track="Data Science"))
    reply["suggestedExpertTags"] = ["Tech Lead", "Tech Lead"]
    reply["summary"] = ""

    result, _ = _merge(make_advisor(reply=reply), profile_data)

    first = result.recommendations[0]
    assert first.percentage == 100
    assert first.learning_ease == "Moderate"
    assert first.roles == ["Software Engineer"]
    assert result.recommendations[1].reason == ""
    assert len(result.recommendations) == 3
    assert result.suggested_expert_tags[0] == "Tech Lead"
    assert len(result.suggested_expert_tags) == 5
    assert len(set(result.suggested_expert_tags)) == 5
    assert "Software Engineering 100%" in result.summary


def test_unusable_replies_fall_back(make_advisor, profile_data, reply):
    unusable = [
        {},
        {"recommendations": "none"},
        {"recommendations": reply["recommendations"][:2]},
        {"recommendations": [dict(r, track="Astrology") for r in reply["recommendations"]]},
        {"recommendations": [dict(r, percentage="high") for r in reply["recommendations"]]},
        {"recommendations": [1, 2, 3]},
        {"recommendations": [dict(r, track="Software Engineering") for r in reply["recommendations"]]},
        {"recommendations": [reply["recommendations"][0]] * 2 + [reply["recommendations"][2]]},
    ]
    for bad in unusable:
        result, _ = _merge(make_advisor(reply=bad), profile_data)
        assert result.source == "fallback", bad


def test_advisor_sends_grounded_json_request(make_openai_client, profile_data, reply):
    client = make_openai_client(content=json.dumps(reply))
    advisor = AIAdvisor(client=client, model="gpt-test")

    result, heuristic_top = _merge(advisor, profile_data)

    kwargs = client.chat.completions.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["temperature"] == 0.2
    assert kwargs["response_format"] == {"type": "json_object"}
    system, user = kwargs["messages"]
    assert system["role"] == "system"
    assert all(track in system["content"] for track in TRACKS)
    body = json.loads(user["content"])
    assert body["email"] == "student@uni.lk"
    assert body["payload"]["programmingSkill"] == 5
    assert body["heuristicTop5"] == [s.model_dump(by_alias=True) for s in heuristic_top]
    assert result.source == "ai"


def test_truncated_json_reply_falls_back(make_openai_client, profile_data, truncated_json):
    advisor = AIAdvisor(client=make_openai_client(content=truncated_json))

    result, _ = _merge(advisor, profile_data)

    assert result.source == "fallback"


def test_openai_error_falls_back(make_openai_client, profile_data):
    advisor = AIAdvisor(client=make_openai_client(error=openai.OpenAIError("network down")))

    result, _ = _merge(advisor, profile_data)

    assert result.source == "fallback"


def test_missing_api_key_falls_back_without_client(monkeypatch, profile_data):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    advisor = AIAdvisor()

    result, _ = _merge(advisor, profile_data)

    assert not advisor.available
    assert result.source == "fallback"


def test_bad_timeout_setting_is_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_TIMEOUT_S", "thirty")

    advisor = AIAdvisor()

    assert advisor.available


def test_timeout_setting_reaches_client(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_TIMEOUT_S", "12.5")

    advisor = AIAdvisor()

    assert advisor.client.timeout == 12.5
