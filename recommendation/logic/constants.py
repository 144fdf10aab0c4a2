"""
Recommendation Engine Constants

Defines the fixed tracks, the profile vocabularies, the career-goal bonus table
and the placeholder content used when the AI advisor is unavailable.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List, Tuple

# =============================================================================
# TRACKS
# =============================================================================

SOFTWARE_ENGINEERING = "Software Engineering"
INFORMATION_TECHNOLOGY = "Information Technology"
DATA_SCIENCE = "Data Science"
NETWORK_ENGINEERING = "Computer Systems & Network Engineering"
CYBER_SECURITY = "Cyber Security"
INFORMATION_SYSTEMS = "Information Systems Engineering"
INTERACTIVE_MEDIA = "Interactive Media"
COMPUTER_SCIENCE = "Computer Science"
COMPUTER_SYSTEMS = "Computer Systems Engineering"

# Order matters: ties in the heuristic ranking keep this order
TRACKS: List[str] = [
    SOFTWARE_ENGINEERING,
    INFORMATION_TECHNOLOGY,
    DATA_SCIENCE,
    NETWORK_ENGINEERING,
    CYBER_SECURITY,
    INFORMATION_SYSTEMS,
    INTERACTIVE_MEDIA,
    COMPUTER_SCIENCE,
    COMPUTER_SYSTEMS,
]

# =============================================================================
# PROFILE VOCABULARIES
# =============================================================================

class AcademicYear(str, Enum):
    YEAR_1 = "1"
    YEAR_2 = "2"
    YEAR_3 = "3"
    YEAR_4 = "4"


class Semester(str, Enum):
    FIRST = "1"
    SECOND = "2"


class ALStream(str, Enum):
    """A-level stream. Empty string means the student did not say."""
    NONE = ""
    PHYSICAL_SCIENCE = "Physical Science"
    BIOLOGICAL_SCIENCE = "Biological Science"
    COMMERCE = "Commerce"
    ARTS = "Arts"
    TECHNOLOGY = "Technology"
    OTHER = "Other"


class Subject(str, Enum):
    PROGRAMMING = "Programming"
    MATHEMATICS = "Mathematics"
    NETWORKING = "Networking"
    DESIGN = "Design"
    RESEARCH = "Research"


class Excitement(str, Enum):
    CODING = "Coding"
    ANALYZING_DATA = "Analyzing Data"
    DESIGNING_MEDIA = "Designing Interfaces & Media"
    MANAGING_IT = "Managing IT Systems"
    SECURING_SYSTEMS = "Securing Systems & Networks"
    BUILDING_HARDWARE = "Building with Hardware/Embedded"
    DOING_RESEARCH = "Doing Research"


class WorkStyle(str, Enum):
    INDIVIDUAL = "Individual"
    TEAM = "Team"


class Level(str, Enum):
    """Tri-level answer used by patience, interest and comfort questions."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class CareerGoal(str, Enum):
    SOFTWARE_ENGINEER = "Software Engineer"
    FULL_STACK_DEVELOPER = "Full Stack Developer"
    MOBILE_DEVELOPER = "Mobile Developer"
    DATA_SCIENTIST = "Data Scientist"
    DATA_ENGINEER = "Data Engineer"
    ML_AI_ENGINEER = "ML/AI Engineer"
    NETWORK_ENGINEER = "Network Engineer"
    DEVOPS_CLOUD_ENGINEER = "DevOps/Cloud Engineer"
    CYBER_SECURITY_ANALYST = "Cyber Security Analyst"
    BUSINESS_ANALYST = "Business Analyst"
    SYSTEMS_ANALYST = "Systems Analyst"
    PRODUCT_OWNER = "Product Owner"
    UI_UX_DESIGNER = "UI/UX Designer"
    GAME_DEVELOPER = "Game Developer"
    RESEARCH_ACADEMIA = "Research/Academia"


class LearningEase(str, Enum):
    EASY = "Easy"
    MODERATE = "Moderate"
    CHALLENGING = "Challenging"


# Messages reported for a field regardless of which rule it broke
FIELD_MESSAGES: Dict[str, str] = {
    "currentYear": "Please select Year 1–4.",
    "currentSemester": "Please select Semester 1 or 2.",
    "cgpa": "Invalid CGPA.",
    "excitement": "Tell us what excites you.",
    "workStyle": "Work style is required.",
    "debugPatience": "Select your patience level.",
}

# Messages for an absent or empty selection; a bad item keeps its own error
MIN_ITEMS_MESSAGES: Dict[str, str] = {
    "subjects": "Pick at least one subject.",
    "careerGoals": "Select at least one career goal.",
}
MIN_ITEMS_ERROR_TYPES = ("too_short", "missing")

MAX_ADDITIONAL_CHARS = 1000

# =============================================================================
# HEURISTIC SCORING
# =============================================================================

# Keywords matched as substrings of each selected career goal
CAREER_GOAL_BONUSES: List[Tuple[Tuple[str, ...], Dict[str, int]]] = [
    (("Data",), {DATA_SCIENCE: 6}),
    (("ML", "AI"), {DATA_SCIENCE: 4, COMPUTER_SCIENCE: 5}),
    (("Network", "DevOps", "Cloud"), {NETWORK_ENGINEERING: 6, INFORMATION_TECHNOLOGY: 4}),
    (("Cyber",), {CYBER_SECURITY: 8}),
    (("UI/UX", "Game"), {INTERACTIVE_MEDIA: 8}),
    (("Research",), {COMPUTER_SCIENCE: 6}),
]

# Percentage given to every track when no track scores above zero
NO_SIGNAL_PERCENTAGE = 50

HEURISTIC_TOP_N = 5
RECOMMENDATION_COUNT = 3
MIN_EXPERT_TAGS = 5

# =============================================================================
# ADVISOR DEFAULTS
# =============================================================================

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.2
FALLBACK_MODEL = "heuristic-fallback"

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"

# Placeholder content for fallback recommendations
FALLBACK_REASON = "Aligned with your interests and skills."
FALLBACK_LEARNING_EASE = "Moderate"
FALLBACK_FUTURE_SCOPE = "Strong demand across industries"
FALLBACK_OPPORTUNITIES = "Local and international openings"

# track -> (roles, required skills, skills to develop next)
TRACK_FALLBACK_CONTENT: Dict[str, Tuple[List[str], List[str], List[str]]] = {
    SOFTWARE_ENGINEERING: (
        ["Software Engineer", "Full Stack Developer", "Mobile Developer"],
        ["Programming fundamentals", "Problem solving", "Databases"],
        ["Algorithms & Data Structures", "Cloud basics"],
    ),
    INFORMATION_TECHNOLOGY: (
        ["IT Support Engineer", "Systems Administrator", "DevOps/Cloud Engineer"],
        ["Operating systems", "Networking basics", "Scripting"],
        ["Cloud platforms", "Automation"],
    ),
    DATA_SCIENCE: (
        ["Data Scientist", "Data Engineer", "ML/AI Engineer"],
        ["Statistics", "Python", "SQL"],
        ["Machine learning", "Data visualization"],
    ),
    NETWORK_ENGINEERING: (
        ["Network Engineer", "DevOps/Cloud Engineer", "Systems Engineer"],
        ["Networking fundamentals", "Linux", "Routing & switching"],
        ["Cloud networking", "Network security"],
    ),
    CYBER_SECURITY: (
        ["Cyber Security Analyst", "Penetration Tester", "Security Engineer"],
        ["Networking fundamentals", "Operating systems", "Security principles"],
        ["Threat analysis", "Secure coding"],
    ),
    INFORMATION_SYSTEMS: (
        ["Business Analyst", "Systems Analyst", "Product Owner"],
        ["Requirements analysis", "Databases", "Communication"],
        ["Process modelling", "Project management"],
    ),
    INTERACTIVE_MEDIA: (
        ["UI/UX Designer", "Game Developer", "Front-end Developer"],
        ["Visual design", "Prototyping", "Programming fundamentals"],
        ["User research", "3D and motion design"],
    ),
    COMPUTER_SCIENCE: (
        ["Software Engineer", "ML/AI Engineer", "Research/Academia"],
        ["Discrete mathematics", "Algorithms", "Programming fundamentals"],
        ["Theory of computation", "Research methods"],
    ),
    COMPUTER_SYSTEMS: (
        ["Embedded Systems Engineer", "Hardware Engineer", "IoT Engineer"],
        ["Digital logic", "C programming", "Mathematics"],
        ["Microcontrollers", "Computer architecture"],
    ),
}

DEFAULT_EXPERT_TAGS: List[str] = [
    "Senior Software Engineer",
    "Data Scientist",
    "DevOps/Cloud Engineer",
    "Cyber Security Analyst",
    "Network Engineer",
]

# =============================================================================
# ADMIN READS
# =============================================================================

DEFAULT_PAGE_LIMIT = 10
RECENT_WINDOW_DAYS = 7
TOP_TRACK_STATS = 5
