from __future__ import annotations

"""Prompt text for the LLM and the deterministic review used when no LLM answers."""

from typing import List, NamedTuple

from .models import AppraisalData, AppraisalRating, SelfAssessment


class Pronouns(NamedTuple):
    subject: str
    object: str
    possessive: str
    reflexive: str


_PRONOUNS = {
    "male": Pronouns("he", "him", "his", "himself"),
    "female": Pronouns("she", "her", "her", "herself"),
}
_NEUTRAL = Pronouns("they", "them", "their", "themselves")


def pronouns_for(gender: str | None) -> Pronouns:
    return _PRONOUNS.get(gender or "", _NEUTRAL)


def performance_level(score: float) -> str:
    if score >= 4.5:
        return "Outstanding"
    if score >= 4.0:
        return "Excellent"
    if score >= 3.5:
        return "Good"
    if score >= 3.0:
        return "Satisfactory"
    if score >= 2.0:
        return "Needs Improvement"
    return "Poor"


def _fmt_score(score: float) -> str:
    # 4.0 -> "4", 3.75 -> "3.75"
    return f"{score:g}"


def _category_label(data: AppraisalData, category_id: str) -> tuple[str, str]:
    cat = data.template.category(category_id)
    if cat is None:
        return category_id, ""
    return cat.name, cat.description


def _rating_lines(data: AppraisalData) -> str:
    lines = []
    for rating in data.ratings:
        name, desc = _category_label(data, rating.category_id)
        lines.append(f"{name} ({desc}): {_fmt_score(rating.score)}/5 - {rating.comments}")
    return "\n".join(lines)


def _self_assessment_block(data: AppraisalData) -> str:
    if not data.self_assessment:
        return ""
    entries: List[str] = []
    for sa in data.self_assessment:
        entries.append(_format_self_assessment(data, sa))
    return "\n\nEmployee Self-Assessment:\n" + "\n\n".join(entries)


def _format_self_assessment(data: AppraisalData, sa: SelfAssessment) -> str:
    name, desc = _category_label(data, sa.category_id)
    return (
        f"{name} ({desc}):\n"
        f"- Self Score: {_fmt_score(sa.self_score)}/5\n"
        f"- Self Comments: {sa.self_comments}\n"
        f"- Key Achievements: {sa.achievements}\n"
        f"- Challenges Faced: {sa.challenges}\n"
        f"- Goals for Next Period: {sa.goals}"
    )


def create_feedback_prompt(data: AppraisalData) -> str:
    """Build the single-turn prompt sent to the LLM for `data`."""
    pronouns = pronouns_for(data.employee_gender)
    categories = "\n".join(f"• {c.name}: {c.description}" for c in data.template.categories)
    manager_extra = ""
    if data.additional_manager_comments:
        manager_extra = f"\n\nAdditional Manager Comments:\n{data.additional_manager_comments}"

    return f"""You are a compassionate and experienced manager writing a performance review for {data.employee_name}. Write a warm, professional, and humanized feedback that feels like it comes from a caring mentor who truly knows and values this person.

Employee: {data.employee_name} (ID: {data.employee_id})
Gender: {data.employee_gender}
Use these pronouns: {pronouns.subject}/{pronouns.object}/{pronouns.possessive}

Overall Performance Score: {data.overall_score:.2f}/5

Evaluation Categories:
{categories}

Manager's Assessment:
{_rating_lines(data)}{_self_assessment_block(data)}{manager_extra}

Please write a natural, conversational performance review that:

1. **Starts directly** - Jump right into the feedback without generic greetings
2. **Speaks from the heart** - Use natural language that feels personal and caring
3. **Balances praise and growth** - Acknowledge strengths while gently addressing areas for improvement
4. **Shows you know them** - Reference specific examples and observations
5. **Offers genuine support** - Provide encouragement and specific, actionable guidance
6. **Ends with hope** - Close with confidence in their potential and your support

Write as if you're having a caring conversation with someone you genuinely want to see succeed. Use natural transitions, avoid corporate jargon, and make it feel like a real human wrote this with care and attention.

Focus on the person, not just the metrics. Show that you see their potential and believe in their growth. Start directly with your observations and feedback - no generic greetings or formalities."""


def _observation(name: str, score: float) -> str:
    area = name.lower()
    if score >= 4.5:
        return (
            f"I've been particularly impressed by your {area}. You've really excelled in this area, "
            "and it shows in the quality of your work."
        )
    if score >= 4.0:
        return (
            f"Your {area} has been strong, and I can see you're putting in real effort here. "
            "There's still room to grow, but you're on the right track."
        )
    if score >= 3.5:
        return (
            f"In terms of {area}, you're doing well overall. I can see you're working hard, "
            "and with a bit more focus, you could really shine in this area."
        )
    if score >= 3.0:
        return (
            f"When it comes to {area}, I see potential for growth. This is an area where I believe "
            "you can really develop with some targeted effort."
        )
    if score >= 2.0:
        return (
            f"I think we both know that {area} is an area where you could use some additional "
            "support and development."
        )
    return (
        f"I want to be honest with you about {area} - this is an area where we need to work "
        "together to help you improve."
    )


def _bullets(data: AppraisalData, ratings: List[AppraisalRating], template: str) -> str:
    lines = []
    for rating in ratings:
        name, _ = _category_label(data, rating.category_id)
        lines.append(template.format(name=name, area=name.lower()))
    return "\n".join(lines)


def generate_mock_feedback(data: AppraisalData) -> str:
    """Deterministic review text; same input always gives the same output."""
    level = performance_level(data.overall_score).lower()

    noticed = []
    for rating in data.ratings:
        name, _ = _category_label(data, rating.category_id)
        comment = rating.comments or "Keep up the good work in this area."
        noticed.append(f"{_observation(name, rating.score)} {comment}")

    strengths = _bullets(
        data,
        [r for r in data.ratings if r.score >= 4.0],
        "• Your {area} is truly a strength - you have a natural talent here that I hope you continue to develop.",
    )
    growth = _bullets(
        data,
        [r for r in data.ratings if r.score < 3.5],
        "• {name} is an area where I believe you have real potential for growth. "
        "With some focused effort, I'm confident you can excel here.",
    )

    recommendations = []
    for rating in data.ratings:
        if rating.score >= 4.0:
            continue
        name, _ = _category_label(data, rating.category_id)
        if rating.score < 3.0:
            action = "take some time to really focus on developing this skill"
        else:
            action = "continue building on the foundation you've already established"
        recommendations.append(f"• For {name.lower()}, I'd love to see you {action}.")

    noticed_text = "\n\n".join(noticed)
    recommendations_text = "\n".join(recommendations)

    return f"""{data.employee_name}, your performance this period has been {level}, and I'm genuinely impressed by the growth I've seen in you. You've consistently shown up with a positive attitude and a willingness to tackle challenges head-on.

**What I've Noticed**
{noticed_text}

**Your Strengths**
{strengths}

**Areas for Growth**
{growth}

**My Recommendations**
{recommendations_text}

**Looking Ahead**
I'm excited about your potential and the contributions you can make to our team. Your {level} performance shows that you have what it takes to succeed here, and I'm committed to supporting your continued growth.

Remember, growth is a journey, not a destination. I'm here to help you navigate any challenges you face, and I believe in your ability to overcome obstacles and achieve your goals.

Keep up the great work, {data.employee_name}. I'm looking forward to seeing what you accomplish in the coming period.

Best regards,
{data.reviewer_name}"""
