"""Writing assistant: improvement, editing, translation, content creation."""

import re
from dataclasses import dataclass, field

from knowledge.models import Action
from shared_types import ActionPriority, AgentKind

from .base import Agent, ResponseBackend
from .models import AgentProfile, AgentResponse
from .prompts import PromptTemplates

PROFILE = AgentProfile(
    id="writing-agent",
    name="Writing Assistant",
    description="Specialized in text improvement, content creation, editing, and writing enhancement",
    capabilities=(
        "improve_text",
        "summarize_text",
        "translate_text",
        "check_grammar",
        "adjust_tone",
        "expand_content",
        "extract_keywords",
        "create_content",
        "edit_text",
        "brainstorm_ideas",
    ),
    personality="creative",
    expertise_areas=(
        "Content Creation",
        "Text Editing",
        "Grammar & Style",
        "Creative Writing",
        "Technical Writing",
        "Translation",
    ),
    system_prompt=PromptTemplates.WRITING_PERSONA,
    kind=AgentKind.WRITING,
)

# (task type, trigger words), first match wins
TASK_TYPES = (
    ("improvement", ("improve", "enhance", "better")),
    ("creation", ("create", "write", "draft")),
    ("editing", ("edit", "fix", "correct")),
    ("translation", ("translate",)),
    ("summarization", ("summarize", "summary")),
)
TEXT_TYPES = {
    "email": ("email", "message", "correspondence"),
    "essay": ("essay", "paper", "article"),
    "report": ("report", "analysis", "document"),
    "creative": ("story", "poem", "creative", "fiction"),
    "business": ("proposal", "business", "professional", "formal"),
    "academic": ("academic", "research", "thesis", "scholarly"),
    "marketing": ("marketing", "copy", "advertisement", "promotional"),
}
STYLES = {
    "formal": ("formal", "professional", "business", "official"),
    "casual": ("casual", "informal", "relaxed", "friendly"),
    "academic": ("academic", "scholarly", "research", "technical"),
    "creative": ("creative", "artistic", "expressive", "imaginative"),
    "persuasive": ("persuasive", "convincing", "compelling", "sales"),
}
AUDIENCES = {
    "professional": ("colleagues", "business", "professionals"),
    "academic": ("students", "researchers", "academics"),
    "technical": ("developers", "engineers", "technical"),
    "marketing": ("customers", "clients", "audience"),
}
LANGUAGES = {
    "spanish": ("spanish", "español"),
    "french": ("french", "français"),
    "german": ("german", "deutsch"),
    "italian": ("italian", "italiano"),
    "portuguese": ("portuguese", "português"),
    "chinese": ("chinese", "中文"),
    "japanese": ("japanese", "日本語"),
}
TONES = {
    "professional": ("professional", "business", "formal"),
    "friendly": ("friendly", "warm", "approachable"),
    "enthusiastic": ("enthusiastic", "excited", "energetic"),
    "serious": ("serious", "grave", "somber"),
    "humorous": ("funny", "humorous", "witty"),
    "persuasive": ("persuasive", "convincing", "compelling"),
}

TARGET_TEXT_PATTERNS = [
    re.compile(r'"([^"]+)"'),
    re.compile(r"'([^']+)'"),
    re.compile(r"text:\s*(.+)", re.I),
    re.compile(r"(?:improve|edit) this:\s*(.+)", re.I),
    re.compile(r"translate:\s*(.+)", re.I),
]
REQUIREMENT_PATTERNS = [
    re.compile(r"make it more ([\w\s]+)", re.I),
    re.compile(r"needs to be ([\w\s]+)", re.I),
    re.compile(r"should be ([\w\s]+)", re.I),
    re.compile(r"focus on ([\w\s]+)", re.I),
]
TOPIC_PATTERNS = [
    re.compile(r"about (.+)", re.I),
    re.compile(r"regarding (.+)", re.I),
    re.compile(r"topic:\s*(.+)", re.I),
]


def _lookup(text: str, table: dict[str, tuple[str, ...]], default: str) -> str:
    lowered = text.lower()
    for label, keywords in table.items():
        if any(k in lowered for k in keywords):
            return label
    return default


def _length_hint(text: str, default: str = "medium") -> str:
    if "short" in text or "brief" in text:
        return "short"
    if "detailed" in text or "comprehensive" in text or "long" in text:
        return "long"
    return default


@dataclass
class WritingRequest:
    task_type: str
    text_type: str
    target_text: str
    requirements: list[str] = field(default_factory=list)
    complexity: str = "simple"


class WritingAgent(Agent):
    def __init__(self, backend: ResponseBackend | None = None, clock=None):
        super().__init__(PROFILE, clock=clock, backend=backend)

    def process_message(self, text: str, mode: str, extra_context: dict | None = None) -> AgentResponse:
        request = self.analyze_request(text)
        actions = self.suggest_actions(text, request)
        message = self.generate(mode, text) or self.response_message(request, mode)

        return AgentResponse(
            message=message,
            actions=actions or None,
            confidence=0.85,
            reasoning=f"Detected {request.task_type} writing task with {request.text_type} content type",
            suggested_follow_ups=self.follow_ups(request.task_type),
        )

    def analyze_request(self, text: str) -> WritingRequest:
        lowered = text.lower()
        task_type = next(
            (label for label, words in TASK_TYPES if any(w in lowered for w in words)), "general"
        )
        target = self.extract_target_text(text)
        requirements = self.extract_requirements(text)

        if len(target) > 1000 or len(requirements) > 3:
            complexity = "complex"
        elif len(target) > 300 or len(requirements) > 1:
            complexity = "moderate"
        else:
            complexity = "simple"

        return WritingRequest(
            task_type=task_type,
            text_type=_lookup(text, TEXT_TYPES, "general"),
            target_text=target,
            requirements=requirements,
            complexity=complexity,
        )

    @staticmethod
    def extract_target_text(text: str) -> str:
        for pattern in TARGET_TEXT_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1).strip()
        return text

    @staticmethod
    def extract_requirements(text: str) -> list[str]:
        return [m.group(1).strip() for p in REQUIREMENT_PATTERNS for m in p.finditer(text)]

    def suggest_actions(self, text: str, request: WritingRequest) -> list[Action]:
        actions = []
        target = request.target_text

        if request.task_type == "improvement":
            actions.append(
                Action(
                    type="improve_text",
                    data={
                        "text": target,
                        "improvements": request.requirements,
                        "style": _lookup(text, STYLES, "neutral"),
                        "target_audience": _lookup(text, AUDIENCES, "general"),
                    },
                    message="Improve the provided text",
                    priority=ActionPriority.HIGH,
                )
            )
        elif request.task_type == "editing":
            actions.append(
                Action(
                    type="check_grammar",
                    data={"text": target, "check_type": "comprehensive"},
                    message="Check grammar and style",
                    priority=ActionPriority.HIGH,
                )
            )
        elif request.task_type == "translation":
            language = _lookup(text, LANGUAGES, "english")
            actions.append(
                Action(
                    type="translate_text",
                    data={"text": target, "target_language": language, "preserve_tone": True},
                    message=f"Translate to {language}",
                    priority=ActionPriority.HIGH,
                )
            )
        elif request.task_type == "summarization":
            actions.append(
                Action(
                    type="summarize_text",
                    data={"text": target, "length": _length_hint(text), "style": "bullet_points"},
                    message="Create a summary",
                )
            )
        elif request.task_type == "creation":
            topic = next(
                (m.group(1).strip() for p in TOPIC_PATTERNS if (m := p.search(text))), "general topic"
            )
            actions.append(
                Action(
                    type="create_content",
                    data={
                        "content_type": request.text_type,
                        "topic": topic,
                        "requirements": request.requirements,
                        "tone": _lookup(text, STYLES, "neutral"),
                        "length": _length_hint(text),
                    },
                    message="Create new content",
                    priority=ActionPriority.HIGH,
                )
            )

        if "tone" in text or "style" in text:
            actions.append(
                Action(
                    type="adjust_tone",
                    data={
                        "text": target,
                        "target_tone": _lookup(text, TONES, "neutral"),
                        "maintain_meaning": True,
                    },
                    message="Adjust tone and style",
                )
            )

        if len(target) > 100:
            actions.append(
                Action(
                    type="extract_keywords",
                    data={"text": target, "max_keywords": 10},
                    message="Extract key terms",
                    priority=ActionPriority.LOW,
                )
            )

        return actions

    def response_message(self, request: WritingRequest, mode: str) -> str:
        kind = request.text_type
        if request.task_type == "improvement":
            return self.pick(
                mode,
                {
                    "creative": f"Let's transform this text into something truly engaging! I'll enhance the {kind} content while keeping your voice.",
                    "analytical": f"I'll systematically analyze and improve this {kind} text, focusing on structure, clarity, and effectiveness.",
                    "task-focused": f"I'll quickly enhance this {kind} content to make it more effective and polished.",
                    "default": f"I'll help improve your {kind} text to make it clearer, more engaging, and more effective.",
                },
            )
        if request.task_type == "creation":
            return self.pick(
                mode,
                {
                    "creative": f"Exciting! Let's create compelling {kind} content together.",
                    "analytical": f"I'll create structured {kind} content based on proven frameworks.",
                    "task-focused": f"I'll create the {kind} content you need efficiently. Let's get this done!",
                    "default": f"I'll help you create great {kind} content that meets your needs.",
                },
            )
        if request.task_type == "editing":
            return self.pick(
                mode,
                {
                    "creative": f"Let's polish this {kind} to perfection while preserving your creative vision.",
                    "analytical": f"I'll provide a thorough editorial review of this {kind}, checking grammar, style, and structure.",
                    "task-focused": f"I'll edit this {kind} quickly and thoroughly to fix any issues.",
                    "default": f"I'll edit your {kind} to fix any errors and improve its overall quality.",
                },
            )
        return self.pick(
            mode,
            {
                "creative": "I'm here to help with all your writing needs! Let's make your words shine.",
                "analytical": "I can assist with writing analysis, structure optimization, and content strategy. What challenge can I help with?",
                "task-focused": "Ready to help with your writing tasks! I can improve text, check grammar, or create content.",
                "default": "I'm your writing assistant! I can improve text, create content, check grammar, adjust tone, and translate.",
            },
        )

    @staticmethod
    def follow_ups(task_type: str) -> list[str]:
        by_task = {
            "improvement": [
                "Would you like me to adjust the tone or style?",
                "Should I focus on any specific aspects like clarity or engagement?",
                "Do you want me to create multiple versions to choose from?",
            ],
            "creation": [
                "Would you like me to create an outline first?",
                "Should I research any specific aspects of this topic?",
                "Do you want multiple drafts or variations?",
            ],
            "editing": [
                "Would you like me to explain the changes I made?",
                "Should I check for any specific style guidelines?",
                "Do you want me to verify any facts or claims?",
            ],
        }
        return by_task.get(
            task_type,
            [
                "What type of writing project are you working on?",
                "Do you have any specific style or tone preferences?",
                "Would you like help with brainstorming or outlining?",
            ],
        )
