"""Prompt rewriting and evaluation through the AI gateway."""

import logging
from dataclasses import dataclass
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.optimize_history import PromptOptimizeHistory
from ccswitch.data.repositories.optimize_history import PromptOptimizeHistoryRepository
from ccswitch.server.llm.gateway import AIGatewayClient
from ccswitch.server.services.base import UserScopedService

logger = logging.getLogger(__name__)

OptimizeAction = Literal["optimize", "iterate", "evaluate"]
PromptMode = Literal["system", "user"]

_KEEP_VARIABLES = "Keep any placeholder variables from the original (such as {{variable}})."
_OUTPUT_ONLY = "Output only the complete optimized prompt, without explanations."


@dataclass(frozen=True)
class PromptTemplate:
    """System instructions and user message template for one template id."""

    system: str
    user: str


TEMPLATES: dict[str, PromptTemplate] = {
    "optimize/general": PromptTemplate(
        system=(
            "You are a prompt engineering expert. Optimize the system prompt the user "
            "provides so it is more structured, explicit and effective.\n\n"
            "Principles:\n"
            "1. Define the AI's role, identity and domain clearly.\n"
            "2. Organize with headings, lists and separators.\n"
            "3. State what the AI should and should not do.\n"
            "4. Specify the expected output format and style.\n"
            "5. Add input/output examples where they help.\n"
            "6. Preserve the original intent; optimizing is not rewriting.\n"
            "7. Stay concise and avoid needless complexity.\n"
            f"8. {_KEEP_VARIABLES}\n\n{_OUTPUT_ONLY}"
        ),
        user="Optimize the following system prompt:\n\n{original_prompt}",
    ),
    "optimize/academic": PromptTemplate(
        system=(
            "You are a prompt engineering expert in academic writing and rigorous "
            "reasoning. Turn the user's system prompt into an academic-grade prompt.\n\n"
            "Principles:\n"
            "1. Use precise, domain-appropriate terminology.\n"
            "2. Keep instructions logically consistent.\n"
            "3. Use numbered, layered structure.\n"
            "4. Ask the AI to cite sources or evidence where appropriate.\n"
            "5. Encourage objective, multi-perspective analysis.\n"
            "6. Bound the scope and depth of answers.\n"
            "7. Preserve the original intent.\n"
            f"8. {_KEEP_VARIABLES}\n\n{_OUTPUT_ONLY}"
        ),
        user=(
            "Optimize the following system prompt in a rigorous academic style:\n\n"
            "{original_prompt}"
        ),
    ),
    "optimize/creative": PromptTemplate(
        system=(
            "You are a prompt engineering expert in creative writing and open-ended "
            "conversation. Make the user's system prompt more creative and expressive.\n\n"
            "Principles:\n"
            "1. Use imaginative language and metaphor.\n"
            "2. Leave the AI room to create.\n"
            "3. Add emotional and personal elements.\n"
            "4. Build rich context and scenes.\n"
            "5. Encourage varied output forms.\n"
            "6. Never drift from the original goal.\n"
            "7. Make the prompt itself engaging.\n"
            f"8. {_KEEP_VARIABLES}\n\n{_OUTPUT_ONLY}"
        ),
        user=(
            "Optimize the following system prompt in a creative, open style:\n\n"
            "{original_prompt}"
        ),
    ),
    "user-optimize/general": PromptTemplate(
        system=(
            "You are an expert at improving the prompts users send to an AI in "
            "conversation. Make the intent clearer, the information more complete and "
            "the wording more effective.\n\n"
            "Principles:\n"
            "1. Clarify what the user actually wants to achieve.\n"
            "2. Add the necessary background and constraints.\n"
            "3. Turn vague descriptions into concrete instructions.\n"
            "4. Break complex requests into points or steps.\n"
            "5. Remove ambiguity.\n"
            "6. Keep a natural conversational tone.\n"
            "7. Do not add unnecessary detail.\n"
            f"8. {_KEEP_VARIABLES}\n\n{_OUTPUT_ONLY}"
        ),
        user="Optimize the following user prompt:\n\n{original_prompt}",
    ),
    "iterate/refine": PromptTemplate(
        system=(
            "You refine already optimized prompts according to user feedback.\n\n"
            "Principles:\n"
            "1. Change only what the feedback asks for.\n"
            "2. Keep what already works.\n"
            "3. Improve one aspect at a time.\n"
            "4. Work the feedback naturally into the prompt.\n"
            "5. Keep style and logic consistent.\n"
            f"6. {_KEEP_VARIABLES}\n\n"
            "Output only the complete refined prompt, without explanations."
        ),
        user=(
            "Current prompt:\n{optimized_prompt}\n\n"
            "Feedback and direction:\n{feedback}\n\n"
            "Refine the prompt according to the feedback."
        ),
    ),
    "evaluate/analyze": PromptTemplate(
        system=(
            "You evaluate prompt quality. Score the prompt from 1 to 10 on each of: "
            "clarity, completeness, structure, effectiveness and concision.\n\n"
            "Write the report in this format:\n\n"
            "## Prompt evaluation\n\n"
            "### Total: X/50\n\n"
            "### Scores\n"
            "- Clarity: X/10\n- Completeness: X/10\n- Structure: X/10\n"
            "- Effectiveness: X/10\n- Concision: X/10\n\n"
            "### Strengths\n- ...\n\n"
            "### Suggestions\n1. ...\n\n"
            "### Direction\n..."
        ),
        user="Evaluate the following prompt:\n\n{original_prompt}",
    ),
}


class OptimizerError(Exception):
    """Raised for optimizer requests that cannot be served."""

    pass


@dataclass(frozen=True)
class OptimizeResult:
    """Gateway output of one optimizer call."""

    result: str
    analysis: str | None
    template: str
    history_id: int


def resolve_template_id(
    action: OptimizeAction, mode: PromptMode = "system", template: str | None = None
) -> str:
    """
    Map an action, prompt mode and template name to a template id.

    Raises:
        OptimizerError: If the combination names no known template
    """
    if action == "evaluate":
        template_id = "evaluate/analyze"
    elif action == "iterate":
        template_id = "iterate/refine"
    elif mode == "user":
        template_id = "user-optimize/general"
    else:
        template_id = f"optimize/{template or 'general'}"

    if template_id not in TEMPLATES:
        raise OptimizerError(f"Unknown template: {template_id}")
    return template_id


def build_messages(
    template_id: str,
    original_prompt: str,
    optimized_prompt: str | None = None,
    feedback: str | None = None,
) -> list[dict[str, str]]:
    """Fill a template into a system and a user message."""
    template = TEMPLATES[template_id]
    user = template.user.format_map(
        {
            "original_prompt": original_prompt,
            "optimized_prompt": optimized_prompt or "",
            "feedback": feedback or "",
        }
    )
    return [
        {"role": "system", "content": template.system},
        {"role": "user", "content": user},
    ]


class PromptOptimizer(UserScopedService):
    """Optimizes, refines and evaluates prompts, keeping a history per user."""

    def __init__(
        self,
        session: AsyncSession,
        user_id: int,
        client: AIGatewayClient | None = None,
    ) -> None:
        super().__init__(session, user_id)
        self.history_repo = PromptOptimizeHistoryRepository(session, user_id)
        self.client = client

    async def run(
        self,
        action: OptimizeAction,
        prompt: str,
        *,
        mode: PromptMode = "system",
        template: str | None = None,
        optimized_prompt: str | None = None,
        feedback: str | None = None,
    ) -> OptimizeResult:
        """
        Send a prompt through the gateway and record the call.

        Raises:
            OptimizerError: For an empty prompt, unknown template or an
                iterate call without previous output and feedback
            AIGatewayError: When the gateway call fails
        """
        if not prompt.strip():
            raise OptimizerError("Prompt must not be empty")
        if action == "iterate" and not (optimized_prompt and feedback):
            raise OptimizerError("Iterating needs the optimized prompt and feedback")

        template_id = resolve_template_id(action, mode, template)
        messages = build_messages(template_id, prompt, optimized_prompt, feedback)

        client = self.client or AIGatewayClient()
        try:
            content = await client.chat(messages)
        finally:
            if self.client is None:
                await client.close()

        if action == "evaluate":
            result, analysis = content, content
            stored_prompt = prompt
        else:
            result, analysis = content, None
            stored_prompt = content or prompt

        entry = await self.history_repo.create(
            original_prompt=prompt,
            optimized_prompt=stored_prompt,
            template=template_id,
            mode=mode,
            action=action,
            feedback=feedback or None,
            analysis=analysis or None,
        )
        logger.info(f"Prompt {action} via {template_id} for user {self.user_id}")
        return OptimizeResult(
            result=result, analysis=analysis, template=template_id, history_id=entry.id
        )

    async def history(self, limit: int = 50) -> list[PromptOptimizeHistory]:
        """Most recent optimizer calls first."""
        return await self.history_repo.list_recent(limit)
