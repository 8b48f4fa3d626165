# -*- coding: utf-8 -*-
########################
# merger_window.py
########################
# Purpose:
# - Qt window for building and running a merge without the command line.
# - Game selection, DSC/plaintext/subtitle input lists, per-chart remove-targets check boxes,
#   lyric settings, Challenge Time, output path, Merge/Reset buttons and a lyrics dialog.
#
# Design notes:
# - All editable state lives in MergerFormState. Widgets write into it and are rebuilt from it.
# - Merges run on the UI thread. Inputs are small and the window shows a modal result either way.
# - Progress and lyric lines go to a RecordingLogger. The status line shows its last message.
#
########################
# Interfaces:
# Public classes:
# - class InputListPanel(PyQt6.QtWidgets.QFrame)
#   - set_paths(paths: list[str]) -> None
#   - selected_index() -> int
# - class LyricsDialog(PyQt6.QtWidgets.QDialog)
# - class MergerWindow(PyQt6.QtWidgets.QMainWindow)
#   - form_state() -> MergerFormState
#   - run_merge() -> bool
#   - reset_form() -> None
#
# Public functions:
# - run_window(config: MergerConfig) -> int
#
# Signals:
# - InputListPanel.requestAdd(), InputListPanel.requestRemove(int)
# - MergerWindow.mergeFinished(bool)
#
########################
# Unit Tests:
# pip install PyQt6
# - Keep as manual UI smoke:
#   - python merger_window.py
# - Form behavior is covered through MergerFormState tests.
########################

from __future__ import annotations

import sys
from typing import List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QDialog,
    QFileDialog,
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from dsc_models import ChallengeTimeDifficulty
from game_variant import GAME_MAP
from merge_application import MergeApplication
from merge_logger import RecordingLogger, format_length_warning
from merger_config import MergerConfig, get_config
from merger_errors import MergerError
from merger_form import MergerFormState


_DSC_FILTER = "DSC files (*.dsc);;All files (*)"
_PLAINTEXT_FILTER = "Text files (*.txt);;All files (*)"
_SUBTITLE_FILTER = "Subtitle files (*.srt *.ass *.ssa)"


class InputListPanel(QFrame):
    requestAdd = pyqtSignal()
    requestRemove = pyqtSignal(int)

    def __init__(self, *, title: str, button_label: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self._list_widget = QListWidget(self)
        self._list_widget.setMinimumHeight(80)

        self._button_add = QPushButton("+ " + button_label, self)
        self._button_remove = QPushButton("- " + button_label, self)
        self._button_remove.setEnabled(False)

        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(4)
        root_layout.addWidget(QLabel(title, self))
        root_layout.addWidget(self._list_widget, 1)

        button_row = QHBoxLayout()
        button_row.setSpacing(6)
        button_row.addWidget(self._button_add)
        button_row.addWidget(self._button_remove)
        button_row.addStretch(1)
        root_layout.addLayout(button_row)

        self._button_add.clicked.connect(self.requestAdd.emit)
        self._button_remove.clicked.connect(self._emit_remove_request)
        self._list_widget.currentRowChanged.connect(self._on_current_row_changed)

    def set_paths(self, paths: List[str]) -> None:
        self._list_widget.clear()
        self._list_widget.addItems(list(paths))
        self._button_remove.setEnabled(False)

    def selected_index(self) -> int:
        return int(self._list_widget.currentRow())

    def _emit_remove_request(self) -> None:
        index = self.selected_index()
        if index >= 0:
            self.requestRemove.emit(index)

    def _on_current_row_changed(self, row: int) -> None:
        self._button_remove.setEnabled(row >= 0)


class LyricsDialog(QDialog):
    def __init__(self, *, logger: RecordingLogger, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Lyrics")
        self.resize(640, 420)

        lyrics_view = QPlainTextEdit(self)
        lyrics_view.setReadOnly(True)
        lyrics_view.setPlainText("\n".join(logger.lyrics))

        root_layout = QVBoxLayout(self)
        root_layout.addWidget(QLabel("Put the following lines inside your mod_pv_db.txt:", self))
        root_layout.addWidget(lyrics_view, 1)

        if logger.problematic_lyrics_lines:
            warnings_label = QLabel(
                "\n".join(
                    format_length_warning(line.index, line.expected, line.actual)
                    for line in logger.problematic_lyrics_lines
                ),
                self,
            )
            warnings_label.setWordWrap(True)
            warnings_label.setStyleSheet("color: #E0B000;")
            root_layout.addWidget(QLabel("Warnings:", self))
            root_layout.addWidget(warnings_label)

        close_button = QPushButton("Close", self)
        close_button.clicked.connect(self.accept)
        button_row = QHBoxLayout()
        button_row.addStretch(1)
        button_row.addWidget(close_button)
        root_layout.addLayout(button_row)


class MergerWindow(QMainWindow):
    mergeFinished = pyqtSignal(bool)

    def __init__(self, *, config: Optional[MergerConfig] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("DSC Merger")

        self._config = config if config is not None else get_config()[0]
        self._form = MergerFormState(defaults=self._config.defaults)
        self._logger = RecordingLogger()

        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout(central_widget)
        root_layout.setContentsMargins(12, 10, 12, 10)
        root_layout.setSpacing(8)

        self._game_combo = QComboBox(self)
        self._game_combo.addItems([name for name, _game in GAME_MAP])
        game_row = QHBoxLayout()
        game_row.addWidget(QLabel("Target game:", self))
        game_row.addWidget(self._game_combo, 1)
        root_layout.addLayout(game_row)

        self._dsc_panel = InputListPanel(title="DSC files:", button_label="DSC", parent=self)
        self._plaintext_panel = InputListPanel(title="Plaintext files:", button_label="Plaintext", parent=self)
        self._subtitle_panel = InputListPanel(title="Subtitles:", button_label="Subtitle", parent=self)
        inputs_row = QHBoxLayout()
        inputs_row.setSpacing(8)
        inputs_row.addWidget(self._dsc_panel, 1)
        inputs_row.addWidget(self._plaintext_panel, 1)
        inputs_row.addWidget(self._subtitle_panel, 1)
        root_layout.addLayout(inputs_row, 1)

        self._remove_targets_list = QListWidget(self)
        self._remove_targets_list.setMaximumHeight(110)
        remove_targets_group = QGroupBox("Remove targets from:", self)
        remove_targets_layout = QVBoxLayout(remove_targets_group)
        remove_targets_layout.addWidget(self._remove_targets_list)
        root_layout.addWidget(remove_targets_group)

        self._pv_id_spinbox = QSpinBox(self)
        self._pv_id_spinbox.setRange(0, 65535)
        self._english_lyrics_checkbox = QCheckBox("English lyrics", self)
        self._max_lyric_length_spinbox = QSpinBox(self)
        self._max_lyric_length_spinbox.setRange(1, 65535)
        lyrics_group = QGroupBox("Lyrics", self)
        lyrics_layout = QGridLayout(lyrics_group)
        lyrics_layout.addWidget(QLabel("PV ID:", self), 0, 0)
        lyrics_layout.addWidget(self._pv_id_spinbox, 0, 1)
        lyrics_layout.addWidget(self._english_lyrics_checkbox, 0, 2)
        lyrics_layout.addWidget(QLabel("Max lyric length:", self), 1, 0)
        lyrics_layout.addWidget(self._max_lyric_length_spinbox, 1, 1)

        self._challenge_time_checkbox = QCheckBox("Challenge Time", self)
        self._difficulty_combo = QComboBox(self)
        self._difficulty_combo.addItems(["Easy", "Normal"])
        self._challenge_start_input = QLineEdit(self)
        self._challenge_start_input.setPlaceholderText("MM:SS.mmm")
        self._challenge_end_input = QLineEdit(self)
        self._challenge_end_input.setPlaceholderText("MM:SS.mmm")
        challenge_group = QGroupBox("Challenge Time", self)
        challenge_layout = QGridLayout(challenge_group)
        challenge_layout.addWidget(self._challenge_time_checkbox, 0, 0, 1, 2)
        challenge_layout.addWidget(QLabel("Chart difficulty:", self), 1, 0)
        challenge_layout.addWidget(self._difficulty_combo, 1, 1)
        challenge_layout.addWidget(QLabel("Start time:", self), 2, 0)
        challenge_layout.addWidget(self._challenge_start_input, 2, 1)
        challenge_layout.addWidget(QLabel("End time:", self), 3, 0)
        challenge_layout.addWidget(self._challenge_end_input, 3, 1)

        settings_row = QHBoxLayout()
        settings_row.addWidget(lyrics_group, 1)
        settings_row.addWidget(challenge_group, 1)
        root_layout.addLayout(settings_row)

        self._output_input = QLineEdit(self)
        self._button_browse = QPushButton("Browse", self)
        output_row = QHBoxLayout()
        output_row.addWidget(QLabel("Output path:", self))
        output_row.addWidget(self._output_input, 1)
        output_row.addWidget(self._button_browse)
        root_layout.addLayout(output_row)

        self._button_merge = QPushButton("Merge!", self)
        self._button_reset = QPushButton("Reset", self)
        self._button_lyrics = QPushButton("View lyrics", self)
        self._button_lyrics.setEnabled(False)
        action_row = QHBoxLayout()
        action_row.addWidget(self._button_merge)
        action_row.addWidget(self._button_reset)
        action_row.addWidget(self._button_lyrics)
        action_row.addStretch(1)
        root_layout.addLayout(action_row)

        self._status_label = QLabel("", self)
        self._status_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._status_label.setWordWrap(True)
        root_layout.addWidget(self._status_label)

        self._game_combo.currentIndexChanged.connect(self._form.set_game_index)
        self._dsc_panel.requestAdd.connect(self._on_add_dsc)
        self._dsc_panel.requestRemove.connect(self._on_remove_dsc)
        self._plaintext_panel.requestAdd.connect(self._on_add_plaintext)
        self._plaintext_panel.requestRemove.connect(self._on_remove_plaintext)
        self._subtitle_panel.requestAdd.connect(self._on_add_subtitle)
        self._subtitle_panel.requestRemove.connect(self._on_remove_subtitle)
        self._remove_targets_list.itemChanged.connect(self._on_remove_targets_item_changed)
        self._button_browse.clicked.connect(self._on_browse_output)
        self._button_merge.clicked.connect(self.run_merge)
        self._button_reset.clicked.connect(self.reset_form)
        self._button_lyrics.clicked.connect(self._show_lyrics_dialog)
        self._challenge_time_checkbox.toggled.connect(self._on_challenge_time_toggled)

        self._sync_widgets_from_form()

    def form_state(self) -> MergerFormState:
        return self._form

    # -----------------
    # Form sync
    # -----------------

    def _sync_widgets_from_form(self) -> None:
        form = self._form

        self._game_combo.setCurrentIndex(form.game_index)
        self._refresh_input_lists()

        self._pv_id_spinbox.setValue(int(form.pv_id))
        self._english_lyrics_checkbox.setChecked(bool(form.english_lyrics))
        self._max_lyric_length_spinbox.setValue(int(form.max_lyric_length))

        self._challenge_time_checkbox.setChecked(bool(form.has_challenge_time))
        self._difficulty_combo.setCurrentIndex(list(ChallengeTimeDifficulty).index(form.challenge_difficulty))
        self._challenge_start_input.setText(form.challenge_time_start)
        self._challenge_end_input.setText(form.challenge_time_end)
        self._on_challenge_time_toggled(bool(form.has_challenge_time))

        self._output_input.setText(form.output)
        self._set_status_text(self._logger.status)

    def _sync_form_from_widgets(self) -> None:
        form = self._form

        form.pv_id = int(self._pv_id_spinbox.value())
        form.english_lyrics = bool(self._english_lyrics_checkbox.isChecked())
        form.max_lyric_length = int(self._max_lyric_length_spinbox.value())

        form.has_challenge_time = bool(self._challenge_time_checkbox.isChecked())
        form.challenge_difficulty = list(ChallengeTimeDifficulty)[max(0, self._difficulty_combo.currentIndex())]
        form.challenge_time_start = (self._challenge_start_input.text() or "").strip()
        form.challenge_time_end = (self._challenge_end_input.text() or "").strip()

        form.output = (self._output_input.text() or "").strip()

    def _refresh_input_lists(self) -> None:
        form = self._form

        self._dsc_panel.set_paths(form.dsc_inputs)
        self._plaintext_panel.set_paths(form.plaintext_inputs)
        self._subtitle_panel.set_paths(form.subtitle_inputs)

        self._remove_targets_list.blockSignals(True)
        self._remove_targets_list.clear()
        for path_text in form.chart_inputs():
            item = QListWidgetItem(path_text, self._remove_targets_list)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            is_checked = form.remove_targets_map.get(path_text, False)
            item.setCheckState(Qt.CheckState.Checked if is_checked else Qt.CheckState.Unchecked)
        self._remove_targets_list.blockSignals(False)

    def _set_status_text(self, text: str) -> None:
        self._status_label.setText((text or "").strip())

    # -----------------
    # Input lists
    # -----------------

    def _pick_files(self, caption: str, file_filter: str) -> List[str]:
        paths, _selected_filter = QFileDialog.getOpenFileNames(self, caption, "", file_filter)
        return [str(path) for path in paths]

    def _on_add_dsc(self) -> None:
        for path_text in self._pick_files("Add DSC files", _DSC_FILTER):
            self._form.add_dsc_input(path_text)
        self._refresh_input_lists()

    def _on_remove_dsc(self, index: int) -> None:
        self._form.remove_dsc_input(index)
        self._refresh_input_lists()

    def _on_add_plaintext(self) -> None:
        for path_text in self._pick_files("Add plaintext files", _PLAINTEXT_FILTER):
            self._form.add_plaintext_input(path_text)
        self._refresh_input_lists()

    def _on_remove_plaintext(self, index: int) -> None:
        self._form.remove_plaintext_input(index)
        self._refresh_input_lists()

    def _on_add_subtitle(self) -> None:
        for path_text in self._pick_files("Add subtitle files", _SUBTITLE_FILTER):
            self._form.add_subtitle_input(path_text)
        self._refresh_input_lists()

    def _on_remove_subtitle(self, index: int) -> None:
        self._form.remove_subtitle_input(index)
        self._refresh_input_lists()

    def _on_remove_targets_item_changed(self, item: QListWidgetItem) -> None:
        self._form.set_remove_targets(item.text(), item.checkState() == Qt.CheckState.Checked)

    def _on_browse_output(self) -> None:
        path_text, _selected_filter = QFileDialog.getSaveFileName(
            self, "Output DSC", self._output_input.text(), _DSC_FILTER
        )
        if path_text:
            self._output_input.setText(str(path_text))

    def _on_challenge_time_toggled(self, is_enabled: bool) -> None:
        for widget in (self._difficulty_combo, self._challenge_start_input, self._challenge_end_input):
            widget.setEnabled(bool(is_enabled))

    # -----------------
    # Actions
    # -----------------

    def run_merge(self) -> bool:
        self._sync_form_from_widgets()
        self._logger.reset()

        try:
            request = self._form.to_request()
            MergeApplication(request, self._logger).run()
        except MergerError as exception:
            self._set_status_text(f"Error: {exception}")
            QMessageBox.critical(self, "Error", str(exception))
            self.mergeFinished.emit(False)
            return False

        self._set_status_text("Done!")
        self._button_lyrics.setEnabled(bool(self._logger.lyrics))
        QMessageBox.information(self, "Yay!", "DSC files merged successfully!")
        self.mergeFinished.emit(True)
        return True

    def reset_form(self) -> None:
        self._form.reset()
        self._logger.reset()
        self._button_lyrics.setEnabled(False)
        self._sync_widgets_from_form()

    def _show_lyrics_dialog(self) -> None:
        LyricsDialog(logger=self._logger, parent=self).exec()


def run_window(config: MergerConfig) -> int:
    qt_application = QApplication(sys.argv)

    merger_window = MergerWindow(config=config)
    merger_window.resize(int(config.window.width), int(config.window.height))
    merger_window.show()

    return int(qt_application.exec())


def main() -> int:
    config, _config_path = get_config()
    return run_window(config)


if __name__ == "__main__":
    raise SystemExit(main())
