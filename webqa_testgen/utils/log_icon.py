icon = {
    "running": "🚀",
    "check": "✅",
    "cross": "❌",
    "warning": "⚠️",
    "file": "📄",
    "folder": "📁",
}
