"""Default values for customizations and the seeded template catalog."""

DEFAULT_COLOR_SCHEME = "#0077B5"
DEFAULT_FONT_FAMILY = "Roboto"
DEFAULT_TITLE_SIZE = "Medium"
DEFAULT_TITLE_ALIGNMENT = "center"
DEFAULT_BACKGROUND_STYLE = "gradient1"
DEFAULT_BACKGROUND_OPACITY = 100

DEFAULT_TITLE_TEXT = "Presentation Title"
DEFAULT_SUBTITLE_TEXT = "Subtitle"

# Seed data for the templates table. The name is the renderer dispatch key.
DEFAULT_TEMPLATES = [
    {
        "name": "Corporate Blue",
        "image_path": "/templates/corporate-blue.svg",
        "category": "Business",
    },
    {
        "name": "Modern Gradient",
        "image_path": "/templates/modern-gradient.svg",
        "category": "Creative",
    },
    {
        "name": "Minimal White",
        "image_path": "/templates/minimal-white.svg",
        "category": "Minimalist",
    },
    {
        "name": "Bold Red",
        "image_path": "/templates/bold-red.svg",
        "category": "Business",
    },
    {
        "name": "Elegant Black",
        "image_path": "/templates/elegant-black.svg",
        "category": "Formal",
    },
    {
        "name": "Tech Blue",
        "image_path": "/templates/tech-blue.svg",
        "category": "Technology",
    },
]
