"""GOV.UK-styled frontend for requesting and tracking automated code reviews."""

__version__ = "0.1.0"
