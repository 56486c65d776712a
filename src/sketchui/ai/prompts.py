"""
Prompt Builder
System and user prompts for generation, editing, sketch analysis and planning.
"""

from typing import Any

from sketchui.core.json import safe_json_dumps
from sketchui.core.validate import SchemaGenerationRequest
from sketchui.sketch.models import SketchElement

# Rules shared by every prompt that returns a UI document
SCHEMA_RULES = """Schema rules:
- Every node has: id, type, props, style, function, children (array)
- type is one of: container, button, text, image, card, navigation, hero, section
- The root node id is "root"
- High-contrast text (text-gray-900 on light bg, text-white on dark)
- Responsive flex/grid layouts; avoid absolute positioning
- Valid image URLs or https://via.placeholder.com/400x300
- Style object uses camelCase keys and string values only
- Never return JSX; only JSON schema"""

SCHEMA_GENERATION_SYSTEM = f"""You are an expert UI/UX designer and developer. Generate a JSON schema for a complete UI layout.

Return a document of the form {{"root": <node>, "metadata": {{"title": ..., "description": ...}}}}.

{SCHEMA_RULES}
"""

SCHEMA_EDIT_SYSTEM = f"""Here is the current UI schema and an edit instruction. Return an updated JSON schema only.
Keep existing node ids for nodes you do not remove. Make small, targeted changes.

{SCHEMA_RULES}
"""

SKETCH_ANALYSIS_SYSTEM = """You are an expert UI/UX analyst specializing in understanding user sketches and annotations on web interfaces. Your job is to analyze hand-drawn sketches and determine what the user wants to achieve.

Action types:
- add_component: User is adding a new UI component (button, form, card, etc.)
- modify_component: User is changing an existing component
- add_page: User is indicating a new page/section should be created
- highlight: User is highlighting something for attention
- note: User is adding a text note or comment

Return your analysis as a JSON object with this exact structure:
{
  "description": "Clear description of what the sketch represents",
  "action": "one of the action types listed above",
  "confidence": number between 0 and 100,
  "targetElement": "id of the node being modified (if applicable)",
  "parameters": {
    "componentType": "button|card|navigation|etc",
    "content": "text content if applicable",
    "style": "visual style preferences",
    "position": "where it should be placed",
    "functionality": "what it should do"
  }
}"""

ACTION_PLAN_SYSTEM = """You are a UI development assistant that creates action plans based on user sketches and annotations. Convert sketch analyses into concrete, ordered development tasks.

Available actions:
1. create_page: Create a new page/route (parameters: pageName, route)
2. add_component: Add a new UI component (parameters: componentType, componentName, content, style, position, functionality)
3. modify_component: Modify an existing component (parameters: the changes to make)
4. add_feature: Add new functionality (parameters: functionality)

Return a JSON array of actions with this structure:
[
  {
    "type": "action_type",
    "description": "Clear description of what needs to be done",
    "targetElement": "node id if modifying",
    "parameters": {}
  }
]"""

ACTION_EXECUTION_SYSTEM = f"""You are an expert UI developer. Apply one planned change to the current UI schema and return the complete updated JSON schema.
Integrate the change with the existing design. Keep existing node ids.

{SCHEMA_RULES}
"""

# How much of the current document an analysis prompt carries
_CODE_EXCERPT = 500

_ACTION_VERBS = {
    "create_page": "Create a new page section",
    "add_component": "Add this component",
    "modify_component": "Modify the existing component",
    "add_feature": "Add this feature",
}


def schema_generation_prompt(request: SchemaGenerationRequest) -> str:
    return (
        f'Create a UI schema for: "{request.prompt}"\n'
        f"Style: {request.style}\n"
        f"Color Scheme: {request.color_scheme}\n"
        f"Layout: {request.layout}\n"
        "Return only JSON."
    )


def schema_edit_prompt(schema_json: str, instruction: str) -> str:
    return f"Current schema:\n{schema_json}\n\nInstruction: {instruction}"


def sketch_analysis_prompt(
    sketch: SketchElement,
    original_prompt: str,
    current_code: str,
    canvas_size: tuple[int, int],
    existing_sketches: int,
) -> str:
    """Describe one annotation and its surroundings."""
    position = f"({sketch.position.x}, {sketch.position.y})" if sketch.position else "Not specified"
    width, height = canvas_size
    return f"""Analyze this sketch on a web interface and determine what the user wants to accomplish.

Sketch details:
- Drawing type: {sketch.type.value}
- Color used: {sketch.color}
- Text content: {sketch.text or 'None'}
- Position: {position}
- Number of points: {len(sketch.points)}
- Stroke width: {sketch.stroke_width}

Context:
- This is part of a UI for: {original_prompt}
- Canvas size: {width}x{height}
- Previous sketches in session: {existing_sketches}
- Current schema includes: {current_code[:_CODE_EXCERPT]}...

Return the JSON analysis."""


def action_plan_prompt(analyses: list[Any], original_prompt: str, current_code: str) -> str:
    lines = "\n".join(
        f"{index}. {analysis.description} (Action: {analysis.action.value}, Confidence: {analysis.confidence}%)"
        for index, analysis in enumerate(analyses, start=1)
    )
    return f"""Original UI: {original_prompt}
Current schema length: {len(current_code)} characters

Based on these sketch analyses, create an action plan:

{lines}

Prioritize by importance and logical order."""


def action_execution_prompt(
    action_type: str,
    description: str,
    target_element: str | None,
    parameters: dict[str, Any],
    original_prompt: str,
    current_code: str,
) -> str:
    verb = _ACTION_VERBS.get(action_type, "Apply this change")
    return f"""{verb}: {description}
Target element: {target_element or 'none specified'}
Parameters: {safe_json_dumps(parameters, indent=2)}

Original UI theme: {original_prompt}
Current UI schema:
{current_code}

Return the complete updated schema as JSON."""
