from PySide6.QtWidgets import QComboBox, QFormLayout, QLabel, QPushButton

from .base_page import BasePage


class SettingsPage(BasePage):
    title = "Settings"

    def build(self, layout):
        form = QFormLayout()
        self.start_page = QComboBox()
        self.mode = QComboBox()
        self.mode.addItems(["remote", "local"])
        self.active = QLabel("")
        form.addRow("Start page", self.start_page)
        form.addRow("Data source (next start)", self.mode)
        form.addRow("Active data source", self.active)
        self.save_button = QPushButton("Save")
        self.saved_label = QLabel("")
        layout.addLayout(form)
        layout.addStretch()
        layout.addWidget(self.saved_label)
        layout.addWidget(self.save_button)

    def on_bind(self, view_model):
        self.start_page.addItems(view_model.page_choices)
        self.active.setText(view_model.active_repository)
        view_model.startPageChanged.connect(self.start_page.setCurrentText)
        view_model.repositoryModeChanged.connect(self.mode.setCurrentText)
        self.save_button.clicked.connect(self._save)

    def _save(self):
        self.view_model.start_page = self.start_page.currentText()
        self.view_model.repository_mode = self.mode.currentText()
        if self.view_model.save():
            self.saved_label.setText("Saved. Data source changes apply after restart.")
