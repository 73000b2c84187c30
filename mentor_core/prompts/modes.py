"""模式解析：Mode -> (任务指令, 引导语)。

纯函数、全定义：任何未识别的输入都落到 career 分支。
新增模式时需要同时扩展 Mode 枚举与 MODE_PROFILES 表。
"""

from typing import Any, Dict, Tuple

from mentor_core.domain.models import Mode, ModeProfile


MODE_PROFILES: Dict[Mode, ModeProfile] = {
    Mode.CAREER: ModeProfile(
        mode=Mode.CAREER,
        task_instruction=(
            "Create a detailed 2-year career roadmap. Include: 3 potential career paths, "
            "core skills to master, recommended learning resources, networking strategies, "
            "and portfolio project ideas."
        ),
        framing_sentence="You want a full career roadmap to reach your long-term goal.",
        label="Full Career Roadmap",
    ),
    Mode.RESUME: ModeProfile(
        mode=Mode.RESUME,
        task_instruction=(
            "Suggest resume enhancements: specific skills, certifications, and tools to add "
            "based on the user's goals. Include quantifiable achievements where possible."
        ),
        framing_sentence="You want tips to boost your resume with your current skills and goals.",
        label="Resume Skill Boost",
    ),
    Mode.STUDY: ModeProfile(
        mode=Mode.STUDY,
        task_instruction=(
            "Build a 6-month personalized study plan. Break it down into monthly milestones "
            "with specific topics, recommended resources (free and paid), and practice exercises."
        ),
        framing_sentence="You want a 6-month personalized study plan to reach your goal.",
        label="Study Plan (6 months)",
    ),
    Mode.INTERVIEW: ModeProfile(
        mode=Mode.INTERVIEW,
        task_instruction=(
            "Generate personalized interview prep guidance, including: 5 common technical "
            "questions, 3 behavioral questions, ideal answer structures, and company research "
            "tips for the user's target role."
        ),
        framing_sentence="You want interview preparation tailored to your field.",
        label="Interview Prep Guidance",
    ),
}


def resolve_mode(mode: Any) -> ModeProfile:
    """返回模式对应的配置；未知值返回 career 配置。"""

    return MODE_PROFILES[Mode.parse(mode)]


def resolve(mode: Any) -> Tuple[str, str]:
    """返回 (task_instruction, framing_sentence)。"""

    profile = resolve_mode(mode)
    return profile.task_instruction, profile.framing_sentence
