"""
sparkvite.templates - Jinja2 Template Files
===========================================

Jinja2 templates for the source and config files sparkvite writes into a
new project. They are rendered by ``sparkvite.files.plan_files``.

Template Naming Convention
--------------------------
- Templates end with the `.j2` extension
- One template serves both languages; the output extension
  (`.jsx`/`.tsx`, `.js`/`.ts`) is chosen by the planner
- `gitignore.j2` → `.gitignore`

Available Templates
-------------------
Config:
    - vite.config.j2: Vite config with Tailwind, alias, PWA and Vitest
    - eslint.config.j2: ESLint flat config (typescript-eslint when typed)
    - gitignore.j2, README.md.j2

Pages and routing:
    - Home.j2, About.j2, MainLayout.j2, App.j2 (routes), main.j2 (entry)

State management:
    - AppContext.j2: React Context provider + hook
    - appStore.j2: Zustand store provider + hook
    - counterSlice.j2, store.j2: Redux Toolkit slice and root store

Tests:
    - App.test.j2: Vitest + Testing Library smoke test

Template Context
----------------
    project_name : str
    typed : bool
        True for TypeScript projects; adds type annotations.
    router, testing, linting, pwa : bool
        Feature toggles.
"""

# Templates are loaded by Jinja2's PackageLoader.
