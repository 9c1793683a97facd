"""create-geo-app: scaffold a Next.js 16 app with shadcn/ui pre-configured."""

__version__ = "1.0.0"
