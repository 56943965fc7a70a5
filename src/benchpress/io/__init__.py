"""Result output subpackage."""
