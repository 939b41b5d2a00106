from importlib import resources

__all__ = ["default_theme_css"]

def default_theme_css() -> str:
    """Return the bundled default_theme.css content as a string."""
    try:
        return resources.files("citymap.resources").joinpath("default_theme.css").read_text()
    except (FileNotFoundError, ModuleNotFoundError):
        return ""
