# utils/i18n.py

"""Internationalization support."""
import locale
from typing import Dict

class Translator:
    """Simple translation system for multilingual support."""

    def __init__(self):
        self.current_lang = 'en'
        self.translations: Dict[str, Dict[str, str]] = {
            'en': {
                # Debug header
                'current_directory': 'Current directory',
                'unknown_directory': 'Unable to get current dir',
                'arguments': 'Arguments',
                'dir_readable': 'Current directory is readable',
                'dir_unreadable': 'Cannot read current directory: {}',

                # Patterns
                'invalid_pattern': 'Invalid glob pattern: {}',
                'warning_line': 'Warning: {}',
                'error_line': 'Error: {}',
                'threads_positive': '--threads must be at least 1',
                'all_invalid': 'No valid patterns; nothing to scan.',
                'no_roots': 'None of the pattern roots could be resolved.',

                # Progress
                'scanning': 'Scanning',
                'interrupted': 'Scan interrupted; totals are partial.',

                # Results
                'no_files': 'No files found matching the patterns',
                'debug_tip': 'Tip: Use --debug flag for debug information',
                'debug_suggestions': 'Debug suggestions:',
                'suggest_cwd': 'Current directory: {}',
                'suggest_location': 'Try running from the directory where your files are located',
                'suggest_ext': 'Check if the file extensions are correct',
                'suggest_braces': 'Brace expansion is not supported, use separate patterns: {} instead of {}',
                'suggest_simple': 'Try a simpler pattern like {} or {}',
                'suggest_perms': 'Check directory permissions with: {}',
                'per_pattern': '--- Per pattern ---',
                'pattern_line': '[{}] {}: {} ({} files)',
                'skipped_entries': 'Skipped entries:',
                'summary': '--- Summary ---',
                'files_processed': 'Files processed',
                'errors': 'Errors',
                'total_size': 'Total size',

                # Settings
                'config_saved': 'Settings saved to {}',
            },

            'de': {
                # Debug header
                'current_directory': 'Aktuelles Verzeichnis',
                'unknown_directory': 'Aktuelles Verzeichnis nicht ermittelbar',
                'arguments': 'Argumente',
                'dir_readable': 'Aktuelles Verzeichnis ist lesbar',
                'dir_unreadable': 'Aktuelles Verzeichnis nicht lesbar: {}',

                # Patterns
                'invalid_pattern': 'Ungültiges Glob-Muster: {}',
                'warning_line': 'Warnung: {}',
                'error_line': 'Fehler: {}',
                'threads_positive': '--threads muss mindestens 1 sein',
                'all_invalid': 'Keine gültigen Muster; nichts zu durchsuchen.',
                'no_roots': 'Keines der Startverzeichnisse konnte aufgelöst werden.',

                # Progress
                'scanning': 'Durchsuche',
                'interrupted': 'Suche abgebrochen; Summen sind unvollständig.',

                # Results
                'no_files': 'Keine passenden Dateien gefunden',
                'debug_tip': 'Tipp: Mit --debug werden Diagnoseinformationen angezeigt',
                'debug_suggestions': 'Hinweise zur Fehlersuche:',
                'suggest_cwd': 'Aktuelles Verzeichnis: {}',
                'suggest_location': 'Starten Sie im Verzeichnis, in dem die Dateien liegen',
                'suggest_ext': 'Prüfen Sie die Dateiendungen',
                'suggest_braces': 'Klammererweiterung wird nicht unterstützt, verwenden Sie getrennte Muster: {} statt {}',
                'suggest_simple': 'Versuchen Sie ein einfacheres Muster wie {} oder {}',
                'suggest_perms': 'Prüfen Sie die Verzeichnisrechte mit: {}',
                'per_pattern': '--- Pro Muster ---',
                'pattern_line': '[{}] {}: {} ({} Dateien)',
                'skipped_entries': 'Übersprungene Einträge:',
                'summary': '--- Zusammenfassung ---',
                'files_processed': 'Verarbeitete Dateien',
                'errors': 'Fehler',
                'total_size': 'Gesamtgröße',

                # Settings
                'config_saved': 'Einstellungen gespeichert in {}',
            }
        }

        # Auto-detect system language
        try:
            system_lang = locale.getlocale()[0]
            if system_lang and system_lang.lower().startswith('de'):
                self.current_lang = 'de'
        except (ValueError, TypeError):
            pass

    def set_language(self, lang_code: str):
        """Set the current language."""
        if lang_code in self.translations:
            self.current_lang = lang_code

    def get(self, key: str, *args) -> str:
        """Get translated string, with optional formatting."""
        text = self.translations[self.current_lang].get(key, key)
        if args:
            try:
                return text.format(*args)
            except (IndexError, KeyError):
                return text
        return text

# Global translator instance
translator = Translator()
