"""Tkinter window for the monthly report.

Features:
- fetch this month's entries from Clockify;
- table of days whose descriptions can be edited (double-click a row);
- export to Word (activity statement) or Excel (attendance grid);
- settings dialog (API key, contractor, company, project filter, contract date);
- status bar with the number of days and the total hours.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import tkinter as tk
from datetime import date
from pathlib import Path
from tkinter import filedialog, font, messagebox, ttk
from typing import List, Optional

from dateutil import tz

from .clockify import ClockifyClient, ClockifyError
from .config import AppConfig
from .export_common import ExportError, save_document
from .exports import build_document
from .logging_setup import configure_logging
from .models import Project, TimeEntry
from .report import ReportState
from .version import VERSION


logger = logging.getLogger(__name__)

ORANGE = "#ea580c"
BACKGROUND = "#f5f5f5"
NO_PROJECT = "(wszystkie projekty)"


def open_with_system(path: str) -> None:
    """Open a file with the program the OS associates with it."""

    if sys.platform.startswith("win"):
        os.startfile(path)  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", path])
    else:
        subprocess.Popen(["xdg-open", path])


class SettingsDialog(tk.Toplevel):
    """Modal settings form; writes back into ``config`` on save."""

    def __init__(self, parent: tk.Tk, config: AppConfig, projects: List[Project]) -> None:
        super().__init__(parent)
        self.title("Ustawienia")
        self.transient(parent)
        self.resizable(False, False)
        self.configure(background=BACKGROUND)
        self.saved = False

        self._config = config
        self._projects = projects
        self.api_key_var = tk.StringVar(value=config.clockify_api_key)
        self.contractor_var = tk.StringVar(value=config.contractor_name)
        self.supervisor_var = tk.StringVar(value=config.supervisor_name)
        self.contract_date_var = tk.StringVar(value=config.contract_date)
        self.project_var = tk.StringVar(value=self._project_label(config.selected_project_id))

        body = ttk.Frame(self, padding=16)
        body.pack(fill=tk.BOTH, expand=True)
        body.columnconfigure(1, weight=1)

        rows = (
            ("Clockify API Key", ttk.Entry(body, textvariable=self.api_key_var, show="*", width=40)),
            ("Imię i Nazwisko (Kontrahent)", ttk.Entry(body, textvariable=self.contractor_var, width=40)),
            ("Nazwa firmy (Dla kogo)", ttk.Entry(body, textvariable=self.supervisor_var, width=40)),
            ("Data zawarcia umowy", ttk.Entry(body, textvariable=self.contract_date_var, width=40)),
            (
                "Projekt",
                ttk.Combobox(
                    body,
                    textvariable=self.project_var,
                    state="readonly",
                    values=[NO_PROJECT] + [project.name for project in projects],
                    width=38,
                ),
            ),
        )
        for index, (label, widget) in enumerate(rows):
            ttk.Label(body, text=label, style="Raporto.TLabel").grid(row=index, column=0, sticky=tk.W, pady=4, padx=(0, 12))
            widget.grid(row=index, column=1, sticky=(tk.W + tk.E), pady=4)

        buttons = ttk.Frame(body)
        buttons.grid(row=len(rows), column=0, columnspan=2, sticky=(tk.W + tk.E), pady=(12, 0))
        ttk.Button(buttons, text="Zapisz", command=self._on_save).pack(side=tk.RIGHT)
        ttk.Button(buttons, text="Anuluj", command=self.destroy).pack(side=tk.RIGHT, padx=(0, 8))

        self.grab_set()
        self.update_idletasks()
        x = parent.winfo_rootx() + (parent.winfo_width() // 2) - (self.winfo_width() // 2)
        y = parent.winfo_rooty() + (parent.winfo_height() // 2) - (self.winfo_height() // 2)
        self.geometry(f"+{x}+{y}")

    def _project_label(self, project_id: Optional[str]) -> str:
        for project in self._projects:
            if project.id == project_id:
                return project.name
        return NO_PROJECT if not project_id else project_id

    def _project_id(self) -> Optional[str]:
        label = self.project_var.get()
        if label == NO_PROJECT:
            return None
        for project in self._projects:
            if project.name == label:
                return project.id
        # The filter was set before projects were loaded; keep it.
        return self._config.selected_project_id

    def _on_save(self) -> None:
        self._config.clockify_api_key = self.api_key_var.get().strip()
        self._config.contractor_name = self.contractor_var.get().strip()
        self._config.supervisor_name = self.supervisor_var.get().strip()
        self._config.contract_date = self.contract_date_var.get().strip()
        self._config.selected_project_id = self._project_id()
        self._config.save()
        self.saved = True
        self.destroy()


class DescriptionDialog(tk.Toplevel):
    """Multi-line editor for one day's description."""

    def __init__(self, parent: tk.Tk, title: str, text: str) -> None:
        super().__init__(parent)
        self.title(title)
        self.transient(parent)
        self.configure(background=BACKGROUND)
        self.result: Optional[str] = None

        body = ttk.Frame(self, padding=12)
        body.pack(fill=tk.BOTH, expand=True)
        self.text = tk.Text(body, width=70, height=8, wrap=tk.WORD)
        self.text.insert("1.0", text)
        self.text.pack(fill=tk.BOTH, expand=True)

        buttons = ttk.Frame(body)
        buttons.pack(fill=tk.X, pady=(8, 0))
        ttk.Button(buttons, text="OK", command=self._on_ok).pack(side=tk.RIGHT)
        ttk.Button(buttons, text="Anuluj", command=self.destroy).pack(side=tk.RIGHT, padx=(0, 8))

        self.grab_set()
        self.text.focus_set()

    def _on_ok(self) -> None:
        self.result = self.text.get("1.0", "end-1c").strip()
        self.destroy()


class RaportoApp(tk.Tk):
    """Main window: toolbar, table of days and status bar."""

    def __init__(self) -> None:
        super().__init__()
        self.title("Raporto")
        self.geometry("900x560")
        self.minsize(640, 400)
        self.configure(background=BACKGROUND)

        self.config_manager = AppConfig.load()
        self.report = ReportState()
        self.entries: List[TimeEntry] = []
        self.projects: List[Project] = []
        # Fetch window and day grouping both follow the local calendar
        self.zone = tz.tzlocal()
        self.month = date.today().replace(day=1)
        self.status_var = tk.StringVar()

        self._configure_styles()
        self._build_menu()
        self._build_layout()
        self._refresh_table()

        # Without an API key the window is useless; ask for it first
        if not self.config_manager.is_complete:
            self.after(100, self._open_settings)

    # ------------------------- UI -------------------------
    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass

        family = "Segoe UI" if sys.platform.startswith("win") else "Arial"
        try:
            font.nametofont("TkDefaultFont").configure(family=family, size=10)
        except tk.TclError:
            pass

        style.configure("TFrame", background=BACKGROUND)
        style.configure("Raporto.TLabel", font=(family, 10), background=BACKGROUND)
        style.configure("Raporto.Title.TLabel", font=(family, 14, "bold"), background=BACKGROUND)
        style.configure("Raporto.Status.TLabel", font=(family, 9), foreground="#555555", background=BACKGROUND)
        style.configure("Raporto.Accent.TButton", foreground="#ffffff", background=ORANGE)
        style.configure("Treeview.Heading", font=(family, 10, "bold"))

    def _build_menu(self) -> None:
        menu_bar = tk.Menu(self)

        file_menu = tk.Menu(menu_bar, tearoff=False)
        file_menu.add_command(label="Pobierz z Clockify", command=self.fetch_entries)
        file_menu.add_command(label="Zapisz do Worda", command=lambda: self.export("docx"))
        file_menu.add_command(label="Zapisz do Excela", command=lambda: self.export("xlsx"))
        file_menu.add_separator()
        file_menu.add_command(label="Ustawienia", command=self._open_settings)
        file_menu.add_separator()
        file_menu.add_command(label="Wyjście", command=self.destroy)
        menu_bar.add_cascade(label="Plik", menu=file_menu)

        help_menu = tk.Menu(menu_bar, tearoff=False)
        help_menu.add_command(label="O programie", command=self._show_about)
        menu_bar.add_cascade(label="Pomoc", menu=help_menu)

        self.config(menu=menu_bar)

    def _build_layout(self) -> None:
        container = ttk.Frame(self, padding=16)
        container.pack(fill=tk.BOTH, expand=True)
        container.columnconfigure(0, weight=1)
        container.rowconfigure(1, weight=1)

        toolbar = ttk.Frame(container)
        toolbar.grid(row=0, column=0, sticky=(tk.W + tk.E), pady=(0, 12))
        self._month_label = ttk.Label(toolbar, style="Raporto.Title.TLabel")
        self._month_label.pack(side=tk.LEFT)
        self._excel_button = ttk.Button(toolbar, text="Zapisz do Excela", command=lambda: self.export("xlsx"))
        self._excel_button.pack(side=tk.RIGHT)
        self._word_button = ttk.Button(
            toolbar, text="Zapisz do Worda", style="Raporto.Accent.TButton", command=lambda: self.export("docx")
        )
        self._word_button.pack(side=tk.RIGHT, padx=(0, 8))
        self._fetch_button = ttk.Button(toolbar, text="Pobierz z Clockify", command=self.fetch_entries)
        self._fetch_button.pack(side=tk.RIGHT, padx=(0, 8))

        table_frame = ttk.Frame(container)
        table_frame.grid(row=1, column=0, sticky=(tk.N + tk.S + tk.W + tk.E))
        table_frame.columnconfigure(0, weight=1)
        table_frame.rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(table_frame, columns=("date", "description", "hours"), show="headings")
        self.tree.heading("date", text="Data")
        self.tree.heading("description", text="Opis (Edytowalny)")
        self.tree.heading("hours", text="Godziny")
        self.tree.column("date", width=110, stretch=False)
        self.tree.column("description", width=600)
        self.tree.column("hours", width=80, anchor=tk.E, stretch=False)
        self.tree.grid(row=0, column=0, sticky=(tk.N + tk.S + tk.W + tk.E))
        self.tree.bind("<Double-1>", self._on_row_activated)
        self.tree.bind("<Return>", self._on_row_activated)

        scrollbar = ttk.Scrollbar(table_frame, orient=tk.VERTICAL, command=self.tree.yview)
        scrollbar.grid(row=0, column=1, sticky=(tk.N + tk.S))
        self.tree.configure(yscrollcommand=scrollbar.set)

        status = ttk.Label(container, textvariable=self.status_var, anchor=tk.W, style="Raporto.Status.TLabel")
        status.grid(row=2, column=0, sticky=(tk.W + tk.E), pady=(12, 0))

    def _show_about(self) -> None:
        messagebox.showinfo("O programie", f"Raporto\nWersja: {VERSION}")

    def _refresh_table(self) -> None:
        """Redraw rows, month label, status bar and button states."""

        self.tree.delete(*self.tree.get_children())
        for index, item in enumerate(self.report.items):
            self.tree.insert(
                "",
                tk.END,
                iid=str(index),
                values=(item.date.isoformat(), item.final_description, item.rounded_hours),
            )

        self._month_label.configure(text=f"Miesiąc: {self.month.month:02d}/{self.month.year}")

        if self.report.is_empty:
            self.status_var.set('Brak danych. Kliknij "Pobierz z Clockify", aby zobaczyć wpisy z bieżącego miesiąca.')
        else:
            self.status_var.set(f"Dni: {len(self.report)}    Suma: {self.report.rounded_total} h")

        export_state = "disabled" if self.report.is_empty else "normal"
        self._word_button.configure(state=export_state)
        self._excel_button.configure(state=export_state)

    # ------------------------- Actions -------------------------
    def _open_settings(self) -> None:
        dialog = SettingsDialog(self, self.config_manager, self.projects)
        self.wait_window(dialog)
        if dialog.saved and self.entries:
            # Project filter may have changed
            self._load_report()
            self._refresh_table()

    def fetch_entries(self) -> None:
        """Download the current month's entries and rebuild the table."""

        if not self.config_manager.is_complete:
            messagebox.showwarning("Brak klucza", "Wprowadź klucz API Clockify w ustawieniach.")
            self._open_settings()
            return

        self._fetch_button.configure(state="disabled")
        self.configure(cursor="watch")
        self.update_idletasks()
        try:
            client = ClockifyClient(self.config_manager.clockify_api_key)
            self.month = date.today().replace(day=1)
            self.entries = client.fetch_month(self.month, self.zone)
            try:
                self.projects = client.get_projects(client.workspace_id)
            except ClockifyError:
                logger.warning("Could not load project list", exc_info=True)
        except ClockifyError as exc:
            messagebox.showerror("Błąd", str(exc))
            return
        finally:
            self._fetch_button.configure(state="normal")
            self.configure(cursor="")

        self._load_report()
        self._refresh_table()

    def _load_report(self) -> None:
        self.report.load(
            self.entries,
            project_id=self.config_manager.selected_project_id,
            tz=self.zone,
            month=self.month,
        )

    def _on_row_activated(self, _event: tk.Event) -> None:  # type: ignore[override]
        selection = self.tree.selection()
        if not selection:
            return
        index = int(selection[0])
        item = self.report.items[index]
        dialog = DescriptionDialog(self, f"Opis: {item.date.isoformat()}", item.final_description)
        self.wait_window(dialog)
        if dialog.result is None:
            return
        self.report.set_description(index, dialog.result)
        self._refresh_table()
        self.tree.selection_set(str(index))

    def export(self, fmt: str) -> None:
        """Ask where to save and write the document in the chosen format."""

        if self.report.is_empty:
            messagebox.showwarning("Brak danych", "Brak danych do wyeksportowania.")
            return

        try:
            document, filename = build_document(fmt, self.report.items, self.config_manager, self.month)
        except ExportError as exc:
            messagebox.showerror("Błąd", str(exc))
            return

        label = "Word" if fmt == "docx" else "Excel"
        save_path = filedialog.asksaveasfilename(
            title="Zapisz jako",
            defaultextension=f".{fmt}",
            filetypes=((label, f"*.{fmt}"), ("Wszystkie pliki", "*.*")),
            initialdir=self.config_manager.last_export_dir or str(Path.home()),
            initialfile=filename,
        )
        if not save_path:
            return

        try:
            path = save_document(document, save_path)
        except OSError as exc:
            messagebox.showerror("Błąd", f"Nie udało się zapisać pliku:\n{exc}")
            return

        self.config_manager.last_export_dir = str(path.parent)
        self.config_manager.save()
        logger.info("Saved %s", path)

        if messagebox.askyesno("Zapisano", f"Plik zapisany:\n{path}\n\nOtworzyć teraz?"):
            try:
                open_with_system(str(path))
            except OSError as exc:
                messagebox.showerror("Błąd", f"Nie udało się otworzyć pliku:\n{exc}")


def main() -> None:
    """Create and run the window."""

    configure_logging()
    app = RaportoApp()
    app.mainloop()


if __name__ == "__main__":
    main()
