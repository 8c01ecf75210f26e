"""didi-stack: scaffold a Vite + React + TailwindCSS + shadcn/ui project."""
