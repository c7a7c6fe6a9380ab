"""
School Records - Activity Suggester
LLM-backed teaching activity ideas for Nursery, LKG and UKG, with a built-in
catalogue used whenever the model is unavailable.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from school_records.ai.core.llm import LLMClient, get_llm_client
from school_records.models.enums import ClassLevel

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a helpful assistant for pre-primary teachers in Nepal. You provide "
    "educational activities and suggestions for Nursery (~3 years), LKG (~4 years), "
    "and UKG (~5 years) students based on Nepal's ECED framework. Focus on creative "
    "activities that develop social skills, pre-literacy, pre-numeracy, motor skills, "
    "and emotional development."
)


class ActivityArea(str, Enum):
    PRE_LITERACY = "pre-literacy activities"
    PRE_NUMERACY = "pre-numeracy activities"
    GENERAL = "general activities"


CLASS_AGES = {
    ClassLevel.NURSERY: 3,
    ClassLevel.LKG: 4,
    ClassLevel.UKG: 5,
}

# First match wins
CLASS_KEYWORDS = [
    ("nursery", ClassLevel.NURSERY),
    ("lkg", ClassLevel.LKG),
    ("ukg", ClassLevel.UKG),
]
AREA_KEYWORDS = [
    (("literacy", "reading", "writing"), ActivityArea.PRE_LITERACY),
    (("math", "number", "counting"), ActivityArea.PRE_NUMERACY),
]

FALLBACK_ACTIVITIES: dict[tuple[ClassLevel | None, ActivityArea], list[tuple[str, str]]] = {
    (ClassLevel.NURSERY, ActivityArea.PRE_LITERACY): [
        ("Picture Book Exploration", "Provide colorful picture books and encourage children to identify objects, colors, and simple actions in the pictures. Ask open-ended questions about what they see."),
        ("Rhyme Time Circle", "Teach simple rhymes with actions like \"Twinkle Twinkle Little Star\" with Nepali translations. Create a daily rhyme time where children join in."),
        ("Letter of the Week", "Introduce one letter per week with sensory activities: trace it in sand, make it with play dough, find objects that start with it."),
        ("Storytelling with Puppets", "Use hand puppets to tell simple stories, letting children interact with the characters and repeat key phrases."),
        ("Name Recognition", "Make a name card with a photo for each child and help them recognize their written name during arrival and transitions."),
    ],
    (ClassLevel.NURSERY, ActivityArea.PRE_NUMERACY): [
        ("Counting Songs", "Teach simple counting songs like \"Five Little Monkeys\", using fingers to represent numbers."),
        ("Sorting Games", "Provide blocks, buttons or leaves for children to sort by color, size, or shape."),
        ("Number Hunt", "Hide number cards (1-5) around the classroom and have children find them and say the numbers."),
        ("Counting Steps", "Count steps when walking to different areas of the classroom or playground."),
        ("Daily Calendar Routine", "Count the day of the month together and look for patterns in the calendar."),
    ],
    (ClassLevel.NURSERY, ActivityArea.GENERAL): [
        ("Sensory Bins", "Fill bins with rice, beans, or water and tools for scooping, pouring, and transferring to build fine motor skills."),
        ("Nature Walk Collage", "Collect leaves, flowers, and small sticks on a short nature walk and make a collage with them."),
        ("Movement Games", "Play \"Simon Says\" or \"Follow the Leader\" to develop gross motor skills and listening."),
        ("Color Scavenger Hunt", "Pick a color each day and have children find objects of that color in the classroom."),
        ("Friendship Circle", "Start each day with a circle where children greet each other by name and share a feeling."),
    ],
    (ClassLevel.LKG, ActivityArea.PRE_LITERACY): [
        ("Letter Sound Games", "Introduce letter sounds through games such as \"I spy something that starts with the sound /b/\"."),
        ("Story Sequencing", "After a familiar story, give picture cards for the beginning, middle, and end to arrange in order."),
        ("Rhyming Word Pairs", "Match rhyming pairs using picture cards (cat-hat, dog-log)."),
        ("Name Writing", "Practice writing names with pencils, markers, chalk, or by forming letters with clay."),
        ("Word Family Houses", "Make house-shaped cards for word families like \"-at\" or \"-an\" and build new words by changing the first letter."),
    ],
    (ClassLevel.LKG, ActivityArea.PRE_NUMERACY): [
        ("Number Formation", "Form numbers 1-10 in sand, shaving cream, or with paintbrushes and water."),
        ("Counting with Movement", "Count while jumping, clapping, or hopping to connect numbers with quantities."),
        ("Simple Addition", "Add one more object to a small group and record the result with pictures."),
        ("Shape Hunt", "Find circles, squares, triangles, and rectangles around the school."),
        ("Measuring Activities", "Measure and compare objects with non-standard units such as cubes or paper clips."),
    ],
    (ClassLevel.LKG, ActivityArea.GENERAL): [
        ("Role Play Centers", "Set up a shop, home, or hospital corner with props to encourage language and social interaction."),
        ("Pattern Activities", "Create and extend simple patterns with beads, blocks, or stamps."),
        ("Friendship Skills", "Use puppets to model sharing, taking turns, and using kind words."),
        ("Scientific Explorations", "Try simple experiments with magnets, sinking and floating, or growing plants."),
        ("Cultural Celebrations", "Introduce festivals of Nepal through music, food, clothing, and stories."),
    ],
    (ClassLevel.UKG, ActivityArea.PRE_LITERACY): [
        ("Sound Blending", "Blend sounds to make three-letter words (c-a-t, d-o-g, s-u-n)."),
        ("Story Creation", "Use picture prompts to help children create their own stories, transcribed by the teacher."),
        ("Word Building", "Build simple words from letter cards, focusing on regular spelling patterns."),
        ("Reading Response", "After a story, children draw their favorite part and dictate or write a sentence about it."),
        ("Environmental Print", "Build a word wall from common signs and labels (STOP, EXIT, familiar product names)."),
    ],
    (ClassLevel.UKG, ActivityArea.PRE_NUMERACY): [
        ("Number Bonds", "Explore different ways to make 10 with manipulatives (7+3, 6+4)."),
        ("Simple Graphing", "Make picture graphs of favorite fruits or animals and compare more, less, and equal."),
        ("Money Concepts", "Run a classroom shop with price tags of 1-10 rupees and play money."),
        ("Number Writing", "Practice writing numbers 1-20 with correct formation."),
        ("Pattern Extension", "Build growing patterns (1 block, 2 blocks, 3 blocks) and predict what comes next."),
    ],
    (ClassLevel.UKG, ActivityArea.GENERAL): [
        ("Community Helpers Project", "Learn about community helpers in Nepal through visits, guest speakers, and role play."),
        ("Problem-Solving Scenarios", "Brainstorm solutions to simple problems like sharing limited resources or including everyone in a game."),
        ("Collaborative Art", "Create a group mural where each child contributes a part."),
        ("Memory Games", "Play increasingly complex memory games with cards or objects."),
        ("Pre-Writing Exercises", "Trace and write simple sentences about their experiences and stories read in class."),
    ],
    (None, ActivityArea.GENERAL): [
        ("Weather Chart", "Observe and record the weather every day using simple symbols."),
        ("Show and Tell", "Each child brings a special item from home once a week and describes it to classmates."),
        ("Music and Movement", "Sing traditional Nepali songs with movements to develop rhythm and coordination."),
        ("Drama and Role Play", "Act out familiar stories or everyday situations to build language and confidence."),
        ("Fine Motor Centers", "Set up stations for threading beads, sorting with tweezers, cutting, and tracing lines."),
    ],
}


@dataclass
class ActivitySuggestion:
    suggestion: str
    source: str  # "ai" or "fallback"


def detect_class(prompt: str) -> ClassLevel | None:
    text = prompt.lower()
    for keyword, class_level in CLASS_KEYWORDS:
        if keyword in text:
            return class_level
    return None


def detect_area(prompt: str) -> ActivityArea:
    text = prompt.lower()
    for keywords, area in AREA_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return area
    return ActivityArea.GENERAL


def fallback_suggestion(prompt: str) -> str:
    """Deterministic suggestions picked by the class and area named in the prompt."""
    class_level = detect_class(prompt)
    area = detect_area(prompt) if class_level else ActivityArea.GENERAL

    if class_level is None:
        heading = "Here are some general teaching activities for pre-primary students:"
    else:
        heading = f"Here are some {area.value} for {class_level.value} students (age {CLASS_AGES[class_level]}):"

    items = [
        f"{number}. {title}: {description}"
        for number, (title, description) in enumerate(FALLBACK_ACTIVITIES[(class_level, area)], start=1)
    ]
    return "\n\n".join([heading, *items])


class ActivitySuggester:
    """
    Suggests classroom activities for a teacher's prompt.

    Uses the configured LLM when an API key is set and falls back to the
    built-in catalogue when it is not, or when the call fails.
    """

    def __init__(self, llm: Optional[LLMClient] = None):
        self.llm = llm or get_llm_client()

    async def suggest(self, prompt: str) -> ActivitySuggestion:
        if not self.llm.is_configured:
            logger.warning("LLM API key not configured; using built-in activity suggestions")
            return ActivitySuggestion(fallback_suggestion(prompt), "fallback")

        try:
            response = await self.llm.generate(prompt, system_prompt=SYSTEM_PROMPT)
        except Exception as e:
            logger.error("Activity suggestion LLM call failed: %s", e)
            return ActivitySuggestion(fallback_suggestion(prompt), "fallback")

        content = (response.content or "").strip()
        if not content:
            logger.warning("LLM returned an empty suggestion; using built-in activity suggestions")
            return ActivitySuggestion(fallback_suggestion(prompt), "fallback")
        return ActivitySuggestion(content, "ai")
