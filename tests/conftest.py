import os
import sys
import warnings

# Ensure project root is on sys.path for `import app`, `import api`, etc.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# ChatOpenAI refuses to construct without a key; tests never reach the network.
os.environ.setdefault("OPENAI_API_KEY", "sk-fake-for-tests")
# No simulated wait on contact submissions in tests
os.environ.setdefault("CONTACT_SUBMIT_DELAY_SECONDS", "0")

# Suppress LangChain deprecation warnings
warnings.filterwarnings("ignore", category=DeprecationWarning, module="langchain.*")
