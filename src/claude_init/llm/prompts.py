"""Prompt templates for LLM calls."""

BASE_SYSTEM_PROMPT = """You are an expert in software development and in generating configuration for software projects.

Your task is to generate configuration files for agents, commands and skills used in AI-assisted development.

Be precise and produce content that is directly usable without further editing."""


PROJECT_CONTEXT_BLOCK = """# PROJECT CONTEXT (from CLAUDE.md)

The current project context follows. Keep generated content coherent and consistent with it:

{claude_md}
---
END OF PROJECT CONTEXT
"""


PROJECT_DETAILS = """## PROJECT DETAILS
- Language: {language}
- Framework: {framework}
- Architecture: {architecture}
- Description: {description}"""


AGENT_PROMPT = """Generate a comprehensive agent configuration file for a {agent_name} agent for a project called {project_name}.

{project_details}

## AGENT SPECIFICATION
- Role: {role}
- Responsibilities:
{responsibilities}
- Coding Guidelines:
{guidelines}
- Tools:
{tools}

## CRITICAL: AGENT CREATION GUIDE

You MUST follow this guide to create the agent. Read it carefully and apply ALL principles:

{guide}

## OUTPUT FORMAT

Generate the agent file following the template structure from the guide above. The output must be a complete, production-ready agent configuration that:

1. Starts with YAML frontmatter containing name, description, tools, model and color
2. Implements the agent loop with all of its phases
3. Declares the injected skills and tools
4. Includes a decision-making strategy with examples
5. Documents golden rules, restrictions and policies
6. Provides an example invocation with its expected output

The agent MUST be agnostic to specific technologies. All technical knowledge comes from injected skills, NOT from the agent definition itself.

Respond with the Markdown file content only."""


SKILL_PROMPT = """Generate a comprehensive skill configuration file for a {category} skill called {skill_name} for a project called {project_name}.

{project_details}

## SKILL SPECIFICATION
- Skill Type: {category}
- Description: {description}
- Title: {title}

## CRITICAL: SKILL CREATION GUIDE

You MUST follow this guide to create the skill. Read it carefully and apply ALL principles:

{guide}

## OUTPUT FORMAT

Generate the skill file following the template structure from the guide above. The output must be a complete, production-ready skill configuration that:

1. Starts with YAML frontmatter containing name and description
2. Documents "How It Works" with clear phases
3. Provides "Usage" examples and trigger phrases
4. Lists "Capabilities" with best practices and patterns
5. Includes "Output Examples" and "Troubleshooting" sections

The skill must be domain-specific knowledge that agents can inject, not procedural instructions.

Respond with the Markdown file content only."""


COMMAND_PROMPT = """Generate a comprehensive command configuration file for a {command_name} command for a project called {project_name}.

{project_details}

## COMMAND SPECIFICATION
- Description: {description}
- Usage: {usage}
- Flow:
{flow}

## CRITICAL: COMMAND CREATION GUIDE

You MUST follow this guide to create the command:

{guide}

## OUTPUT FORMAT

Start with YAML frontmatter containing name, description and usage. Describe the orchestrated flow as numbered phases, each naming the agent and the skills it uses, followed by the critical rules.

Respond with the Markdown file content only."""


COMMAND_CONTEXT_SECTION = """## AVAILABLE AGENTS AND SKILLS

Below are the agents and skills that have been created for this project.
You MUST reference ONLY these agents and skills when creating this command.

### AVAILABLE AGENTS
{agents_context}

### AVAILABLE SKILLS
{skills_context}

## HOW TO SELECT THE RIGHT AGENTS AND SKILLS

1. READ the description of every available agent
2. IDENTIFY the agent whose role matches this command's primary goal
3. READ the purpose of every available skill
4. SELECT the skills that complement the chosen agent for this task
5. DO NOT default to the same agent and skill for every command

For each phase state the agent, why its description fits, and which skills it uses:

### 1. [Phase Name]
- **Agent**: [agent-name-from-the-list] - selected because its description mentions "[relevant part]"
- **Skills**:
    - [skill-from-the-list]: provides "[relevant purpose]"
- [Action to perform]

CRITICAL: Use ONLY agents and skills from the AVAILABLE AGENTS and AVAILABLE SKILLS lists above. Pick them by WHAT they do according to their description or purpose."""


OPENAI_COMMAND_AUGMENTATION = """## ADDITIONAL REQUIREMENTS

Generate a comprehensive, detailed command configuration:

1. Do not default to the same agent and skill combinations
2. Include concrete examples in the Usage section
3. Generate at least 4 workflow phases
4. Use at least 4 different agents from the available list
5. Add a Mermaid diagram of the workflow
6. Add detailed rollback procedures"""


# Extra instructions appended to the command prompt, keyed by provider id
PROVIDER_COMMAND_AUGMENTATIONS = {
    "openai": OPENAI_COMMAND_AUGMENTATION,
}


RECOMMENDATION_PROMPT = """Based on the following project information, recommend the optimal AI-assisted development structure.

Project Name: {name}
Description: {description}
Language: {language}
Framework: {framework}
Architecture: {architecture}
Database: {database}
Project Category: {category}
Business Context: {business_context}

Recommend:
1. Which agents should be generated (agent names)
2. Which commands should be generated (command names)
3. Which skills should be included (skill names)
4. A brief description of the recommended structure

ALL agent, command and skill names MUST be kebab-case (lowercase words joined by hyphens), for example "code-reviewer", "test-runner", "bug-fix".

Respond with ONLY a raw JSON object, without Markdown fences or explanations:
{{
  "agents": ["agent-name-1", "agent-name-2"],
  "commands": ["command-name-1", "command-name-2"],
  "skills": ["skill-name-1", "skill-name-2"],
  "description": "Brief description of the recommended structure"
}}"""


ANALYSIS_SYSTEM_PROMPT = """You are an expert software project analyst. Your task is to analyze existing projects and extract structured information about them.

Be precise and concise. If unsure about a field, use an empty string or a generic appropriate value."""


ANALYSIS_PROMPT = """Analyze this project based on the following information:

{scan}

Based on this file structure and configuration, identify:
1. Project name (from the directory or the config files)
2. Main programming language
3. Framework(s) used
4. Architecture type (Monolith, Microservices, etc.)
5. Database if applicable
6. Project category (API, Web App, CLI, Library, etc.)
7. Business context and purpose
8. Testing framework if present

Respond with a JSON object using this exact structure:
{{
  "name": "project name",
  "description": "brief project description",
  "language": "main programming language (Go, Python, JavaScript, TypeScript, etc.)",
  "framework": "framework used, or empty string",
  "architecture": "architecture type (Monolith, Microservices, Hexagonal, Layered, etc.)",
  "database": "database used, or empty string",
  "project_category": "project type (REST API, Web App, CLI, Library, etc.)",
  "business_context": "business context and project purpose",
  "git_system": "version control system, or empty string",
  "testing_framework": "testing framework, or empty string"
}}

CRITICAL: Respond with ONLY the raw JSON object. Do not include Markdown code blocks, explanations or any additional text."""


CLAUDE_MD_PROMPT = """Generate a complete and detailed CLAUDE.md file for the following project.

This file is read by AI coding assistants to understand the project and give accurate help.

**Basic project information:**
- **Name:** {name}
- **Description:** {description}
- **Main language:** {language}
- **Framework:** {framework}

**Additional information from analyzing the project:**
{project_context}

Follow this format and level of detail:

# CLAUDE.md

This file provides guidance to AI coding assistants when working with code in this repository.

## Project Overview
[Concise but complete description of the project, its purpose and main goals]

## Tech Stack
- **Framework**: [framework and version]
- **Language**: [language and version]
- **Package Manager**: [which one MUST be used]
- [Other important technologies]

## Essential Commands

### Development
### Building
### Testing
### Other

## Architecture

### Directory Structure
[The REAL directory structure of the project]

### Key Architectural Concepts

## Import Path Aliases
## Code Quality
## Environment Setup
## Component/Module Guidelines

Generate the full Markdown content, specific to this project. Do NOT use placeholders such as "..." or generic commands. When specific information is available (such as package scripts), USE it."""


DEVELOPMENT_GUIDE_PROMPT = """Generate a complete and detailed development guide for the following project.

**Basic project information:**
- **Name:** {name}
- **Description:** {description}
- **Main language:** {language}
- **Framework:** {framework}
- **Architecture:** {architecture}

**Additional information from analyzing the project:**
{project_context}

## THE PROJECT'S AI-ASSISTED DEVELOPMENT STRUCTURE

This project has a configuration directory with custom agents, skills and commands.

### Configured Agents
{agents_readme}

### Available Skills
{skills_readme}

### Available Commands
{commands}

The guide must be a complete Markdown document covering:

1. **Project Structure**: the REAL directory layout and how the code is organized for the stated architecture
2. **Code Conventions**: style, file naming, identifier naming, comments and project-specific patterns
3. **Build System and Scripts**: the important scripts, what each does, and which package manager to use
4. **Specific Configuration**: import aliases and code generation steps, if any
5. **Testing**: framework, strategy, commands and coverage target
6. **Git and Commits**: message convention, branching strategy and pull request process
7. **Code Review**: checklist and quality criteria
8. **Deployment**: process, environments and production build commands
9. **Using the AI structure**: how to use the commands, when to invoke each agent, which skills fit each task

Base the content on the REAL project information above. Do NOT use generic placeholders such as "...". Include the real commands that would be run."""
