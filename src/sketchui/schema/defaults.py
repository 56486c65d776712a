"""Default documents and per-type defaults."""

from .models import NodeType, SchemaMetadata, UISchema, UISchemaNode, ROOT_ID, type_name


PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/400x300"
PLACEHOLDER_ALT = "Placeholder image"
FALLBACK_FUNCTION = "UI component"

DEFAULT_FUNCTIONS: dict[str, str] = {
    NodeType.BUTTON.value: "Interactive button for user actions",
    NodeType.TEXT.value: "Text content for information display",
    NodeType.IMAGE.value: "Visual content for illustration",
    NodeType.CARD.value: "Container for related content",
    NodeType.NAVIGATION.value: "Navigation menu for site structure",
    NodeType.HERO.value: "Main banner section for key messaging",
    NodeType.SECTION.value: "Content section for organizing layout",
    NodeType.CONTAINER.value: "Layout container for grouping elements",
}


def default_function(node_type: NodeType | str | None) -> str:
    """Purpose statement used when a node has none."""
    return DEFAULT_FUNCTIONS.get(type_name(node_type), FALLBACK_FUNCTION)


def create_default_schema(prompt: str) -> UISchema:
    """Minimal landing page: a root container holding one hero with a title and a button."""
    return UISchema(
        version=1,
        root=UISchemaNode(
            id=ROOT_ID,
            type=NodeType.CONTAINER,
            props={"className": "min-h-screen bg-white"},
            function="Main page container",
            children=[
                UISchemaNode(
                    id="hero",
                    type=NodeType.HERO,
                    props={"className": "py-20 px-4 text-center"},
                    style={"backgroundColor": "#f8fafc"},
                    function="Hero section for main messaging",
                    children=[
                        UISchemaNode(
                            id="hero-title",
                            type=NodeType.TEXT,
                            props={
                                "className": "text-4xl font-bold mb-4",
                                "content": "Welcome to Our Platform",
                            },
                            style={"color": "#1f2937"},
                            function="Main headline text",
                        ),
                        UISchemaNode(
                            id="hero-button",
                            type=NodeType.BUTTON,
                            props={
                                "className": "bg-blue-600 text-white px-6 py-3 rounded-lg hover:bg-blue-700",
                                "text": "Get Started",
                            },
                            function="Primary call-to-action button",
                        ),
                    ],
                )
            ],
        ),
        metadata=SchemaMetadata(title="Generated UI", description=prompt),
    )
