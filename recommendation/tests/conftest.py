"""
Shared fixtures: a valid profile, a scripted AI advisor, an in-memory
preference store, a Motor-shaped collection and a fake OpenAI client.
"""

import copy
import json
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from recommendation.errors import PersistenceError


VALID_PROFILE = {
    "currentYear": "2",
    "currentSemester": "1",
    "cgpa": 3.4,
    "alStream": "Physical Science",
    "hasPhysicsAndCombinedMaths": True,
    "subjects": ["Programming", "Mathematics"],
    "excitement": "Coding",
    "programmingSkill": 5,
    "mathSkill": 3,
    "cyberSkill": 2,
    "uiuxSkill": 2,
    "researchSkill": 2,
    "motivation": 4,
    "languages": ["Python", "Java"],
    "workStyle": "Team",
    "debugPatience": "High",
    "hardwareInterest": "Low",
    "designCreativity": "Medium",
    "dataHandlingComfort": "Medium",
    "securityMindset": "Low",
    "wantsResearchPath": False,
    "careerGoals": ["Software Engineer", "Full Stack Developer"],
    "additional": "I enjoy building web apps.",
    "consentToShareWithExperts": True,
}


class FakeAdvisor:
    """Stands in for AIAdvisor: returns a scripted reply or raises."""

    def __init__(self, reply=None, error=None, model="gpt-test"):
        self.reply = reply
        self.error = error
        self.model = model
        self.calls = []

    async def advise(self, profile, heuristic_top, email=None):
        self.calls.append({"profile": profile, "heuristic_top": heuristic_top, "email": email})
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.reply)


class FakeStore:
    """In-memory stand-in for PreferenceStore.create."""

    def __init__(self, fail=False):
        self.fail = fail
        self.documents = []

    async def create(self, document):
        if self.fail:
            raise PersistenceError("database is down")
        stored = dict(document, _id=ObjectId())
        self.documents.append(stored)
        return str(stored["_id"])


class FakeCursor:
    def __init__(self, docs):
        self.docs = list(docs)

    def sort(self, key, direction):
        self.docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return self

    def skip(self, n):
        self.docs = self.docs[n:]
        return self

    def limit(self, n):
        self.docs = self.docs[:n]
        return self

    async def to_list(self, length=None):
        return self.docs if length is None else self.docs[:length]


class FakeCollection:
    """Ignores query filters except an exact `email` or `_id` match."""

    def __init__(self, docs=(), aggregates=(), fail=False):
        self.docs = list(docs)
        self.aggregates = list(aggregates)
        self.fail = fail
        self.queries = []
        self.pipelines = []

    def _matching(self, query):
        self.queries.append(query)
        docs = self.docs
        for key in ("email", "_id"):
            if key in query:
                docs = [d for d in docs if d.get(key) == query[key]]
        return docs

    async def insert_one(self, document):
        if self.fail:
            raise ServerSelectionTimeoutError("no primary")
        document = dict(document, _id=ObjectId())
        self.docs.append(document)
        return type("InsertOneResult", (), {"inserted_id": document["_id"]})()

    async def count_documents(self, query):
        return len(self._matching(query))

    def find(self, query):
        return FakeCursor(self._matching(query))

    async def find_one(self, query):
        docs = self._matching(query)
        return docs[0] if docs else None

    def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        return FakeCursor(self.aggregates.pop(0) if self.aggregates else [])



class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai_client(content=None, error=None):
    """Object shaped like AsyncOpenAI exposing chat.completions.create."""
    completions = FakeCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def ai_reply(**overrides):
    reply = {
        "recommendations": [
            {
                "track": "Software Engineering",
                "percentage": 92,
                "reason": "Strong programming and debugging patience.",
                "roles": ["Software Engineer", "Full Stack Developer"],
                "requiredSkills": ["Python", "Git"],
                "developNext": ["System design"],
                "learningEase": "Moderate",
                "futureScope": "High demand.",
                "opportunities": "Many local openings.",
            },
            {
                "track": "Information Technology",
                "percentage": 70,
                "reason": "Comfortable in teams.",
                "roles": ["Systems Administrator"],
                "requiredSkills": ["Networking basics"],
                "developNext": ["Cloud"],
                "learningEase": "Easy",
                "futureScope": "Stable.",
                "opportunities": "Steady demand.",
            },
            {
                "track": "Computer Science",
                "percentage": 55,
                "reason": "Good mathematics.",
                "roles": ["Research Engineer"],
                "requiredSkills": ["Algorithms"],
                "developNext": ["Theory"],
                "learningEase": "Challenging",
                "futureScope": "Research growth.",
                "opportunities": "Academia and R&D.",
            },
        ],
        "suggestedExpertTags": [
            "Senior Software Engineer",
            "Tech Lead",
            "Full Stack Developer",
            "DevOps/Cloud Engineer",
            "Engineering Manager",
        ],
        "summary": "Software Engineering is your strongest match.",
    }
    reply.update(overrides)
    return reply


@pytest.fixture
def profile_data():
    return copy.deepcopy(VALID_PROFILE)


@pytest.fixture
def reply():
    return ai_reply()


@pytest.fixture
def make_advisor():
    return FakeAdvisor


@pytest.fixture
def make_openai_client():
    return fake_openai_client


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def failing_store():
    return FakeStore(fail=True)


@pytest.fixture
def truncated_json():
    return json.dumps(ai_reply())[:57]


@pytest.fixture
def make_collection():
    return FakeCollection
